# src/ratecard/__main__.py
from ratecard.app import main

raise SystemExit(main())
