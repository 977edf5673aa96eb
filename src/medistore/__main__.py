from medistore.cli import main

main()
