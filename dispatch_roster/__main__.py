import sys

from dispatch_roster.main import main

sys.exit(main())
