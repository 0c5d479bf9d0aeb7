from psquote.psquote import main

main()
