import sys

from cmdlisp.cli import main

sys.exit(main())
