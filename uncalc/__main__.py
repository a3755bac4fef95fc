import sys

from uncalc.main import main

sys.exit(main())
