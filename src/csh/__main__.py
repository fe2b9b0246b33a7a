import sys

from csh.cli import main

sys.exit(main())
