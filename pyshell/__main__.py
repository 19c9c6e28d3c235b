import sys

from pyshell.main import main

sys.exit(main())
