#!/usr/bin/env python3
"""
One-shot panel allocation, for use outside the admin UI.

Usage: python scripts/auto_assign_panels.py [--create] [--force]
  --create   pair the faculty pool into panels first
  --force    with --create, replace existing panels
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from capstone.services.panel_service import PanelService
from capstone.utils.logger import get_logger
from capstone.database import init_db

logger = get_logger('auto_assign_panels')


def main(argv):
    """Create panels if asked, then assign panels to unassigned projects"""
    init_db()
    panel_service = PanelService()

    if '--create' in argv:
        result = panel_service.auto_create_panels(force='--force' in argv)
        if not result.get('success'):
            logger.error(f"Panel creation failed: {result['message']}")
            return 1
        logger.info(result['message'])

    result = panel_service.auto_assign_panels_to_projects()
    if not result.get('success'):
        logger.error(f"Panel assignment failed: {result['message']}")
        return 1

    logger.info(f"{result['message']} assigned={result['assigned']} skipped={result['skipped']}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
