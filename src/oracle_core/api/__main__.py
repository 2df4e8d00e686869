"""Allow running the API as: python -m oracle_core.api."""

from oracle_core.api.runner import main

main()
