"""Allow running as `python -m honeycombio`."""

from honeycombio.cli import main

main()
