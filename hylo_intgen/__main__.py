import sys

from hylo_intgen.cli import main

sys.exit(main())
