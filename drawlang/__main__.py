from drawlang.cli import main

raise SystemExit(main())
