import asyncio
import logging
from typing import Set

from wifiupload.common.target import ServerTarget
from wifiupload.common.connection import UploadConnection
from wifiupload.common.packetizers.http import RequestFramer, RequestTooLarge
from wifiupload.protocol.http import HTTPRequest, HTTPResponse
from wifiupload.handler import UploadAPIHandler
from wifiupload.lifecycle import HostLifecycle
from wifiupload.status import UploadStatusBoard
from wifiupload.store import DocumentStore

srvlogger = logging.getLogger('wifiupload.server')

# Seconds a socket stays open after its response was sent. The transport
# gives no signal that the peer has read everything, so the close is
# simply deferred to let slow clients finish reading.
CLOSE_DELAY = 3


class UploadServer:
	"""
	Local network upload server.

	One instance is meant to live for the whole process. running and
	upload_status are there for a host UI to observe.

	Every socket gets its own task (connection supervisor) which frames a
	single request, dispatches it, writes the response and hands the
	socket over to a delayed close. The active connection set, the status
	board and all document store access are serialized through self.lock.

	Known gaps: a peer that never completes its headers holds its
	connection until stop() since there is no receive timeout.
	"""
	def __init__(self, target:ServerTarget = None, store:DocumentStore = None, lifecycle:HostLifecycle = None, status_callback = None):
		if target is None:
			target = ServerTarget()
		self.target = target
		self.lifecycle = lifecycle
		if lifecycle is None:
			self.lifecycle = HostLifecycle()

		self.running = False
		self.started_evt = asyncio.Event()
		self.lock = asyncio.Lock()
		self.upload_status = UploadStatusBoard(self.target.status_ttl, on_change = status_callback)
		self.active_connections:Set[UploadConnection] = set()
		self.handler = UploadAPIHandler(store, self.upload_status)

		self.id_counter = 0
		self.__server:asyncio.AbstractServer = None
		self.__closers:Set[asyncio.Task] = set()
		self.__background_token = None

	async def __aenter__(self):
		await self.start()
		return self

	async def __aexit__(self, exc_type, exc, tb):
		await self.stop()

	@property
	def store(self):
		return self.handler.store

	def attach_store(self, store:DocumentStore):
		self.handler.store = store

	@property
	def port(self):
		"""The port actually bound, useful when the target asked for port 0."""
		if self.__server is None or len(self.__server.sockets) == 0:
			return self.target.port
		return self.__server.sockets[0].getsockname()[1]

	def get_connection_id(self):
		t = self.id_counter
		self.id_counter += 1
		return t

	async def start(self):
		if self.running is True or self.__server is not None:
			return
		try:
			self.__server = await asyncio.start_server(
				self.__handle_connection,
				self.target.get_ip_or_hostname(),
				self.target.port,
				reuse_address = True,
			)
		except Exception as e:
			srvlogger.error('Failed to start server on %s:%s Reason: %s' % (self.target.get_ip_or_hostname(), self.target.port, e))
			self.running = False
			raise

		self.running = True
		self.started_evt.set()
		srvlogger.info('Upload server started on port %s' % self.port)

	async def serve_forever(self):
		await self.start()
		try:
			await self.__server.serve_forever()
		finally:
			await self.stop()

	async def stop(self):
		"""
		Stops listening and drops every connection immediately.

		A handler that is already running finishes its store mutation,
		its client just never receives the response.
		"""
		server = self.__server
		self.__server = None
		self.running = False
		if server is not None:
			server.close()

		async with self.lock:
			connections = list(self.active_connections)
			self.active_connections.clear()

		for connection in connections:
			await connection.abort()
		tasks = [x.task for x in connections if x.task is not None and x.task is not asyncio.current_task()]

		closers = list(self.__closers)
		for closer in closers:
			closer.cancel()
		await asyncio.gather(*(tasks + closers), return_exceptions = True)

		if server is not None:
			await server.wait_closed()

		self.started_evt.clear()
		self.enter_foreground()
		srvlogger.info('Upload server stopped')

	def enter_background(self):
		if self.running is False or self.__background_token is not None:
			return
		self.__background_token = self.lifecycle.begin_background_task(self.enter_foreground)
		srvlogger.debug('Host moved to background, background task requested')

	def enter_foreground(self):
		token = self.__background_token
		self.__background_token = None
		if token is not None:
			self.lifecycle.end_background_task(token)
			srvlogger.debug('Background task ended')

	async def __delayed_close(self, connection:UploadConnection):
		try:
			await asyncio.sleep(CLOSE_DELAY)
			srvlogger.debug('[%s] Closing connection after grace period' % connection.connection_id)
		finally:
			await connection.close()

	async def __release(self, connection:UploadConnection):
		async with self.lock:
			self.active_connections.discard(connection)
		closer = asyncio.create_task(self.__delayed_close(connection))
		self.__closers.add(closer)
		closer.add_done_callback(self.__closers.discard)

	async def __drop(self, connection:UploadConnection):
		async with self.lock:
			self.active_connections.discard(connection)
		await connection.abort()

	async def __handle_connection(self, reader:asyncio.StreamReader, writer:asyncio.StreamWriter):
		framer = RequestFramer(self.target.buffer_size, self.target.max_request_size)
		connection = UploadConnection(reader, writer, framer, self.get_connection_id())
		connection.task = asyncio.current_task()
		cid = connection.connection_id
		async with self.lock:
			if self.running is False:
				await connection.abort()
				return
			self.active_connections.add(connection)
		srvlogger.debug('[%s] New connection from %s' % (cid, connection.get_extra_info('peername')))

		try:
			try:
				data = await connection.read_one()
			except RequestTooLarge as e:
				srvlogger.warning('[%s] %s' % (cid, e))
				response = HTTPResponse.text(413, 'Request too large')
			except Exception as e:
				srvlogger.debug('[%s] Receive error: %s' % (cid, e))
				await self.__drop(connection)
				return
			else:
				if data is None:
					srvlogger.debug('[%s] Connection closed with no data' % cid)
					await self.__drop(connection)
					return
				response = await self.process_request(data, cid)

			srvlogger.debug('[%s] Sending %s' % (cid, response))
			try:
				await connection.write(response.to_bytes())
			except Exception as e:
				srvlogger.debug('[%s] Send error: %s' % (cid, e))
			await self.__release(connection)

		except asyncio.CancelledError:
			await connection.abort()
			raise
		except Exception:
			srvlogger.exception('[%s] Connection handler failed' % cid)
			await self.__drop(connection)

	async def process_request(self, data:bytes, cid:int = None):
		request, err = HTTPRequest.from_bytes(data)
		if err is not None:
			srvlogger.debug('[%s] Malformed request: %s' % (cid, err))
			return HTTPResponse.text(400, 'Invalid request')

		srvlogger.debug('[%s] %s %s (%s bytes, %s)' % (
			cid,
			request.method,
			request.path,
			request.headers_upper.get('CONTENT-LENGTH', len(request.body)),
			request.headers_upper.get('USER-AGENT', 'no user agent')
		))
		async with self.lock:
			try:
				return self.handler.dispatch(request)
			except Exception:
				srvlogger.exception('[%s] Handler failed for %s %s' % (cid, request.method, request.path))
				return HTTPResponse.text(500, 'Server error')
