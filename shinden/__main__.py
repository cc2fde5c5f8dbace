"""
Command line entry point: fetch a Shinden page and print it as JSON.

Usage:
    python -m shinden search naruto --page 2
    python -m shinden user-overview 123
    python -m shinden user-settings 123 --log-level DEBUG
"""

import argparse
import json
import sys

from utils.logging_config import setup_logging, get_logger

USER_COMMANDS = {
    'user-overview': 'get_user_overview',
    'user-achievements': 'get_user_achievements',
    'user-favourite-tags': 'get_user_favourite_tags',
    'user-recommendations': 'get_user_recommendations',
    'user-information': 'get_user_information',
    'user-settings': 'get_user_settings',
}


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(prog='shinden', description='Shinden client - map pages to JSON')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Logging level (defaults to LOG_LEVEL from config.py)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Log file path (defaults to LOG_FILE from config.py)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    search = subparsers.add_parser('search', help='Search anime by title')
    search.add_argument('query', type=str)
    search.add_argument('--page', type=int, default=1, help='Result page (default: 1)')

    for command in USER_COMMANDS:
        user = subparsers.add_parser(command, help=f'Map the {command} page of a user')
        user.add_argument('user_id', type=int)

    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_arguments(argv)
    setup_logging(args.log_file, args.log_level)
    logger = get_logger('shinden')

    from shinden.client import ShindenClient
    from shinden.exceptions import ShindenError

    client = ShindenClient.from_config()
    try:
        if args.command == 'search':
            result = client.search_anime(args.query, page=args.page)
        else:
            result = getattr(client, USER_COMMANDS[args.command])(args.user_id)
    except ShindenError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    data = [item.to_dict() for item in result] if isinstance(result, list) else result.to_dict()
    print(json.dumps(data, ensure_ascii=False, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
