#!/usr/bin/env python3
"""
Station Efficiency Report Script for PV Derating.

Computes temperature-derated efficiency for each station, ranks the
stations and writes the CSV report.

Usage:
    python scripts/run_pv_report.py [--stations FILE] [--output PATH]

Options:
    --stations   YAML or CSV station file (default: built-in network)
    --output     CSV report path (default: results.csv)
    --config     YAML configuration file
    --decimals   Decimal places in the report (3 or 4)
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

# Load environment variables
load_dotenv(project_root / ".env")

from pv_derating.cli import main


if __name__ == "__main__":
    sys.exit(main())
