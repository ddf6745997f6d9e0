# users_service/__main__.py

import sys

from users_service.main import main


sys.exit(main())
