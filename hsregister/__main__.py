import sys

from hsregister.main import main

sys.exit(main())
