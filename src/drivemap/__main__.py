import sys

from drivemap.main import main

sys.exit(main())
