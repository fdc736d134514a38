from block_blast.cli import main

main()
