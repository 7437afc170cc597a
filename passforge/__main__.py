import sys

from passforge.cli import main

sys.exit(main())
