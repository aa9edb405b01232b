import json
import logging
import sys
import argparse

from core.config_loader import BatchConfig, load_config
from core.exceptions import NotFoundError
from core.matching_service import MatchingService
from database.database import configure_database
from database.init_db import init_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def cmd_calculate(service: MatchingService, args) -> int:
    results = service.calculate_matching(args.user_id)
    print(json.dumps([r.to_dict() for r in results], indent=2))
    return 0


def cmd_top(service: MatchingService, args) -> int:
    matches = service.get_top_matches(args.user_id, args.limit)
    for match in matches:
        name = match.mentor.name if match.mentor else match.mentor_id
        print(f"{match.compatibility_score:>3}  {name}  {match.match_factors.to_dict()}")
    return 0


def cmd_batch(service: MatchingService, args) -> int:
    job = service.run_batch_matching(args.user_ids)
    logger.info(f"Batch job {job.job_id} started for {job.total_users} users")

    job = service.job_manager.wait(job.job_id)
    if job.error:
        logger.error(f"Batch job failed: {job.error}")
        return 1

    print(json.dumps(job.result.to_dict(), indent=2))
    return 0 if job.result.success else 2


def main():
    parser = argparse.ArgumentParser(description="TELL Matching Driver")
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help='Create database tables')

    calculate = subparsers.add_parser('calculate', help='Calculate matches for one user')
    calculate.add_argument('user_id')

    top = subparsers.add_parser('top', help='Show the best stored matches for a user')
    top.add_argument('user_id')
    top.add_argument('--limit', type=int, default=None)

    batch = subparsers.add_parser('batch', help='Recalculate matches for many users (all by default)')
    batch.add_argument('user_ids', nargs='*')
    batch.add_argument('--workers', type=int, default=None,
                       help='Worker pool size (overrides config)')

    args = parser.parse_args()

    config = load_config(args.config)
    configure_database(config.database.url)

    if args.command == 'init-db':
        init_db()
        return 0

    if getattr(args, 'workers', None) is not None:
        config.matching.batch = BatchConfig(
            max_workers=args.workers,
            keep_completed_jobs=config.matching.batch.keep_completed_jobs
        )

    service = MatchingService(config.matching)
    commands = {
        'calculate': cmd_calculate,
        'top': cmd_top,
        'batch': cmd_batch,
    }

    try:
        return commands[args.command](service, args)
    except NotFoundError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
