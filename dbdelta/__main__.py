import sys

from dbdelta.main import main

sys.exit(main())
