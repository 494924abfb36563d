import sys

from ai_podcast.adapters.cli import main

sys.exit(main())
