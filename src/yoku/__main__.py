from yoku.cli import main

raise SystemExit(main())
