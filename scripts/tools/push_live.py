#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Push the published application live from the command line"""
import asyncio
import sys
from pathlib import Path

# Project root on the import path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

# Load environment variables
from dotenv import load_dotenv
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)

from quizcms.core.config import settings
from quizcms.crud import template as template_crud
from quizcms.exceptions import BaseAppError
from quizcms.models.base import get_async_session_maker, get_production_session_maker
from quizcms.services import deploy_service


async def show_active_templates():
    """Print the templates currently served to the quiz runtime"""
    async with get_production_session_maker()() as store_session:
        templates = await template_crud.get_active_templates(store_session)
    print(f"[INFO] Active templates: {len(templates)}")
    for template in templates:
        required = "required" if template.is_required else "optional"
        print(f"  - [{template.order}] {template.quiz_id} ({required}, {len(template.quiz_data)} steps)")


async def push_live():
    print(f"\n{'='*60}")
    print("Push live")
    print(f"{'='*60}\n")
    print(f"[INFO] DATABASE_URL: {settings.database_url[:50]}...")
    print(f"[INFO] PRODUCTION_DATABASE_URL: {settings.production_url[:50]}...")

    async with get_async_session_maker()() as content_session, \
            get_production_session_maker()() as store_session:
        try:
            summary = await deploy_service.push_application_live(content_session, store_session)
        except BaseAppError as e:
            print(f"\n[ERROR] {e.__class__.__name__}: {e.message}")
            return 1

    print(f"[OK] Application: {summary.application_title} (id={summary.application_id})")
    print(f"  - main sections: {summary.main_sections}")
    print(f"  - follow-up sections: {summary.follow_up_sections}")
    print(f"  - deactivated: {summary.deactivated_count}")
    print(f"  - created: {summary.created_count}")
    print(f"  - updated: {summary.updated_count}")
    for report in summary.skipped_sections:
        print(f"[WARN] Skipped section {report.section_id} ({report.title}): {report.reason}")
    for report in summary.failed_sections:
        print(f"[ERROR] Failed section {report.section_id} ({report.title}): {report.reason}")
    for template in summary.templates:
        print(f"  - [{template.order}] {template.quiz_id}")
    return 2 if summary.partial else 0


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Deploy the published application to the production template store")
    parser.add_argument("--show-active", action="store_true", help="Only list the active templates")

    args = parser.parse_args()

    if args.show_active:
        asyncio.run(show_active_templates())
    else:
        sys.exit(asyncio.run(push_live()))
