import asyncio
from wifiupload.common.packetizers import Packetizer


class UploadConnection:
	def __init__(self, reader:asyncio.StreamReader, writer:asyncio.StreamWriter, packetizer:Packetizer, connection_id:int = None):
		self.reader = reader
		self.writer = writer
		self.packetizer = packetizer
		self.connection_id = connection_id
		self.task:asyncio.Task = None
		self.closing = False
		self.closed_evt = asyncio.Event()

	async def __aenter__(self):
		return self

	async def __aexit__(self, exc_type, exc, tb):
		await self.close()

	def __repr__(self):
		return '<UploadConnection %s %s>' % (self.connection_id, self.get_extra_info('peername'))

	def get_extra_info(self, name, default=None):
		if self.writer is None:
			return default
		return self.writer.get_extra_info(name, default)

	async def close(self):
		if self.closed_evt.is_set():
			return
		self.closing = True
		if self.writer is not None:
			self.writer.close()
		self.closed_evt.set()

	async def abort(self):
		"""Cancels the connection's own task (if any) and drops the socket."""
		self.closing = True
		if self.task is not None and self.task is not asyncio.current_task():
			self.task.cancel()
		if self.writer is not None:
			self.writer.transport.abort()
		self.closed_evt.set()

	async def write(self, data):
		async for packet in self.packetizer.data_out(data):
			self.writer.write(packet)
			await self.writer.drain()

	async def read_one(self):
		stream = self.read()
		try:
			async for packet in stream:
				return packet
			return None
		finally:
			await stream.aclose()

	async def read(self):
		while self.closing is False:
			data = await self.reader.read(self.packetizer.buffer_size)
			if data == b'':
				break
			async for result in self.packetizer.data_in(data):
				yield result

		#end of stream, let the packetizer flush what it holds
		async for result in self.packetizer.data_in(None):
			yield result
