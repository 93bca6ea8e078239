from bunana.cli import main

raise SystemExit(main())
