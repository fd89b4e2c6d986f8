"""Allow ``python -m tubescribe``."""

from tubescribe.cli.main import main

if __name__ == "__main__":
    main()
