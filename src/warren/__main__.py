from warren._cli import main

main()
