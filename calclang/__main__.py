import sys

from calclang.main import main


sys.exit(main())
