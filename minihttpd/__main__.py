from minihttpd.main import main

main()
