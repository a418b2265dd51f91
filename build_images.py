#!/usr/bin/env python3
import argparse
import os
import sys
from release_images.models import TriggerEvent
from release_images.services.pipeline_service import PipelineService
from release_images.utils.logging import setup_logger

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build and push the API, Queue and UI images")
    trigger = parser.add_mutually_exclusive_group()
    trigger.add_argument('--manual', action='store_true', help='Run as a manual invocation instead of reading the GitHub event')
    trigger.add_argument('--release-tag', help='Run for a published release of GITHUB_REPOSITORY')
    parser.add_argument('--only', action='append', metavar='COMPONENT', help='Build only the named component (repeatable)')
    parser.add_argument('--dry-run', action='store_true', help='Run in dry-run mode without building or pushing anything')
    args = parser.parse_args(argv)

    logger = setup_logger("BuildImages")
    try:
        components_file = os.environ.get("COMPONENTS_FILE", f"{ROOT_DIR}/components.yaml")
        reports_file = os.environ.get("BUILD_REPORTS_FILE", f"{ROOT_DIR}/build-reports.yaml")
        source = os.environ.get("SOURCE_REPOSITORY", os.getcwd())
        commit = os.environ.get("GITHUB_SHA", "HEAD")
        logger.info(f"Starting image builds with components file: {components_file}")
        service = PipelineService(
            components_file,
            reports_file,
            source,
            commit=commit,
            event=TriggerEvent(name="workflow_dispatch") if args.manual else None,
            release_tag=args.release_tag,
            only=args.only,
            dry_run=args.dry_run,
        )
        service.run()
        logger.info("Image builds completed successfully")
        return 0
    except Exception as e:
        logger.error(f"Image builds failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
