from minigrep.cli import main

raise SystemExit(main())
