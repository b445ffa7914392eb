import sys

from glass.main import main

sys.exit(main())
