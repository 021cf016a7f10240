#!/usr/bin/env python3
"""
Upload server

Serves the upload page and its JSON API on the local network. Folders and
files go to a JSON store in the given directory, or to memory when no
directory is given.

Usage:
    python uploadserver.py [directory] [--host HOST] [--port PORT] [--debug]
"""

import asyncio
import logging

from wifiupload import logger
from wifiupload._version import __banner__
from wifiupload.common.target import ServerTarget
from wifiupload.server import UploadServer
from wifiupload.store import JSONDocumentStore, MemoryDocumentStore


async def amain(args):
	if args.directory is not None:
		store = JSONDocumentStore(args.directory)
	else:
		logger.info('No directory given, uploads are kept in memory only')
		store = MemoryDocumentStore()

	target = ServerTarget(args.host, args.port, max_request_size = args.max_request_size)
	server = UploadServer(target, store)
	await server.serve_forever()


def main():
	import argparse

	parser = argparse.ArgumentParser(
		description='Local network text upload server',
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog='''
Examples:
  %(prog)s                          # In-memory store on 0.0.0.0:8080
  %(prog)s ./library                # Persist folders and files in ./library
  %(prog)s ./library --port 9000    # Use a custom port
  %(prog)s --debug                  # Log every connection
		''')
	parser.add_argument('directory', nargs='?', help='Directory of the JSON document store (optional)')
	parser.add_argument('--host', '-H', default='0.0.0.0', help='Address to bind to (default: 0.0.0.0)')
	parser.add_argument('--port', '-p', type=int, default=8080, help='Port to bind to (default: 8080)')
	parser.add_argument('--max-request-size', type=int, default=16*1024*1024, help='Largest accepted request in bytes (default: 16MB)')
	parser.add_argument('--debug', '-d', action='store_true', help='Enable debug logging')

	args = parser.parse_args()
	print(__banner__)
	if args.debug is True:
		logger.setLevel(logging.DEBUG)

	try:
		asyncio.run(amain(args))
	except KeyboardInterrupt:
		print('Server stopped')

if __name__ == '__main__':
	main()
