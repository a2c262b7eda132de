from cadentis.cli import main

raise SystemExit(main())
