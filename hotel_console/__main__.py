import sys

from hotel_console.main import main

sys.exit(main())
