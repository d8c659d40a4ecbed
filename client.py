"""
FolderSync Client - Main Entry Point

This is the main entry point for the FolderSync client application.
Parses command-line arguments and dispatches to the CLI operations.

Author: FolderSync Project
"""

import sys
import argparse

from version import VERSION


def main(argv=None):
    """
    Main entry point for FolderSync client.

    Operations:
    - sync: crawl the given folders (or the configured ones) and upload files
    - list: show the server's uploads for the given folder ids
    - publish / unpublish: change folder visibility on the server
    - login: verify credentials with the server and store them for later runs
    """
    parser = argparse.ArgumentParser(
        description='FolderSync - Folder Upload Client',
    )
    parser.add_argument('--version', action='version', version=f'FolderSync {VERSION}')

    parser.add_argument('operation', choices=['sync', 'list', 'publish', 'unpublish', 'login'],
                        help='Operation to perform')

    # Root folders for sync
    parser.add_argument('folders', nargs='*',
                        help='Root folders to sync (defaults to root_folders from config)')

    # Server folder ids for list/publish/unpublish
    parser.add_argument('--folder-ids', nargs='+', type=int, default=[],
                        help='Server folder ids (list, publish, unpublish)')

    parser.add_argument('--email', help='Account email address (login)')

    parser.add_argument('--config', help='Path to config.json')

    args = parser.parse_args(argv)

    from cli import run_cli_operation
    return run_cli_operation(args.operation, args.folders, args.folder_ids, args.config, args.email)


if __name__ == '__main__':
    sys.exit(main())
