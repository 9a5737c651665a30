import sys

from lcrepl.main import main


sys.exit(main())
