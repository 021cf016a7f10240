import json
import asyncio
from typing import List, Tuple, Dict

import h11

from wifiupload import logger
from wifiupload._version import __version__
from wifiupload.common.connection import UploadConnection
from wifiupload.common.packetizers import Packetizer


class UploadResult:
	def __init__(self, status:int, headers:Dict[str, str], body:bytes):
		self.status = status
		self.headers = headers
		self.body = body

	def __repr__(self):
		return '<UploadResult %s %r>' % (self.status, self.body[:50])

	@property
	def ok(self):
		return self.status == 200

	@property
	def text(self):
		return self.body.decode('utf-8')

	def json(self):
		return json.loads(self.body)


class UploadClient:
	"""
	Talks to an upload server, one connection per request.

	Request and response framing is done by h11, independently from the
	server's own framing code.
	"""
	def __init__(self, host:str = '127.0.0.1', port:int = 8080, timeout:int = 10):
		self.host = host
		self.port = port
		self.timeout = timeout
		self.ident = ('wifiupload-client/%s %s' % (__version__, h11.PRODUCT_ID)).encode('ascii')

	async def __next_event(self, connection:UploadConnection, httpconn:h11.Connection):
		while True:
			event = httpconn.next_event()
			if event is h11.NEED_DATA:
				data = await connection.read_one()
				if data is None:
					data = b''
				httpconn.receive_data(data)
				continue
			return event

	async def __request(self, method:str, target:str, data:bytes = None):
		reader, writer = await asyncio.wait_for(
			asyncio.open_connection(self.host, self.port),
			timeout = self.timeout
		)
		async with UploadConnection(reader, writer, Packetizer()) as connection:
			httpconn = h11.Connection(our_role=h11.CLIENT)
			headers:List[Tuple[str, str]] = [
				('Host', '%s:%s' % (self.host, self.port)),
				('User-Agent', self.ident.decode()),
				('Connection', 'close'),
			]
			if data is not None:
				headers.append(('Content-Type', 'application/json'))
				headers.append(('Content-Length', str(len(data))))

			await connection.write(httpconn.send(h11.Request(method=method, target=target, headers=headers)))
			if data is not None:
				await connection.write(httpconn.send(h11.Data(data=data)))
			await connection.write(httpconn.send(h11.EndOfMessage()))

			status = None
			resp_headers = {}
			body = b''
			while True:
				event = await self.__next_event(connection, httpconn)
				if type(event) is h11.Response:
					status = event.status_code
					for name, value in event.headers:
						resp_headers[name.decode()] = value.decode()
				elif type(event) is h11.Data:
					body += event.data
				elif type(event) in (h11.EndOfMessage, h11.ConnectionClosed):
					break

			if status is None:
				raise Exception('Server closed the connection without a response')
			logger.debug('%s %s -> %s' % (method, target, status))
			return UploadResult(status, resp_headers, body)

	async def request(self, method:str, target:str, data:bytes = None):
		try:
			res = await asyncio.wait_for(self.__request(method, target, data), timeout = self.timeout)
			return res, None
		except Exception as e:
			return None, e

	async def post_json(self, target:str, payload:Dict):
		return await self.request('POST', target, json.dumps(payload).encode('utf-8'))

	async def get_page(self):
		return await self.request('GET', '/')

	async def list_folders(self):
		return await self.request('GET', '/api/folders')

	async def create_folder(self, folder_name:str):
		return await self.post_json('/api/createFolder', {'folderName' : folder_name})

	async def create_file(self, file_name:str, content:str, folder_name:str = None):
		payload = {
			'fileName' : file_name,
			'content' : content,
		}
		if folder_name is not None:
			payload['folderName'] = folder_name
		return await self.post_json('/api/createFile', payload)
