"""Package entry point for ``python -m vtt_karaoke``.

Delegates to the CLI's main() function.
"""

from vtt_karaoke.cli import main

if __name__ == "__main__":
    main()
