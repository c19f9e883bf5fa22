from phonedrop.cli import main

raise SystemExit(main())
