"""Allow running as ``python -m deploy_changed_functions``"""

from .cli.main import main

main()
