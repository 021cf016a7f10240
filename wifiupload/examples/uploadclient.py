#!/usr/bin/env python3
"""
Command line client for the upload server.

Usage:
    python uploadclient.py [--host HOST] [--port PORT] folders
    python uploadclient.py mkdir NAME
    python uploadclient.py put FILE [--name NAME] [--folder FOLDER]
"""

import sys
import asyncio
import logging
from pathlib import Path

from wifiupload import logger
from wifiupload.client import UploadClient


async def amain(args):
	client = UploadClient(args.host, args.port, timeout = args.timeout)
	if args.command == 'folders':
		res, err = await client.list_folders()
	elif args.command == 'mkdir':
		res, err = await client.create_folder(args.name)
	elif args.command == 'put':
		path = Path(args.file)
		name = args.name if args.name is not None else path.name
		res, err = await client.create_file(name, path.read_text(encoding='utf-8'), args.folder)
	else:
		raise Exception('Unknown command %s' % args.command)

	if err is not None:
		print('Request failed: %s' % err)
		return 2

	if args.command == 'folders' and res.ok is True:
		for name in res.json():
			print(name)
	else:
		print('%s %s' % (res.status, res.text))
	return 0 if res.ok is True else 1


def main():
	import argparse

	parser = argparse.ArgumentParser(description='Upload server client')
	parser.add_argument('--host', '-H', default='127.0.0.1', help='Server address (default: 127.0.0.1)')
	parser.add_argument('--port', '-p', type=int, default=8080, help='Server port (default: 8080)')
	parser.add_argument('--timeout', type=int, default=10, help='Request timeout in seconds')
	parser.add_argument('--debug', '-d', action='store_true', help='Enable debug logging')

	subparsers = parser.add_subparsers(help = 'commands', dest='command')
	subparsers.required = True
	subparsers.add_parser('folders', help='List folders')
	mkdir_group = subparsers.add_parser('mkdir', help='Create a folder')
	mkdir_group.add_argument('name', help='Folder name')
	put_group = subparsers.add_parser('put', help='Upload a text file')
	put_group.add_argument('file', help='Local text file')
	put_group.add_argument('--name', help='File name on the server (default: local file name)')
	put_group.add_argument('--folder', help='Target folder')

	args = parser.parse_args()
	if args.debug is True:
		logger.setLevel(logging.DEBUG)

	sys.exit(asyncio.run(amain(args)))

if __name__ == '__main__':
	main()
