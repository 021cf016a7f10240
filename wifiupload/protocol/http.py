from typing import List, Tuple

from wifiupload.common.packetizers.http import HEADER_TERMINATOR

CORS_HEADERS = [
	('Access-Control-Allow-Origin', '*'),
	('Access-Control-Allow-Methods', 'GET, POST, OPTIONS'),
	('Access-Control-Allow-Headers', 'Content-Type'),
]

class HTTPRequest:
	def __init__(self):
		self.method:str = None
		self.path:str = None
		self.version:str = None
		self.header_lines:List[str] = []
		self.headers_upper = {}
		self.body:bytes = b''

	def __str__(self):
		t = '%s %s %s\r\n' % (self.method, self.path, self.version)
		for line in self.header_lines:
			t += '%s\r\n' % line
		t += '\r\n'
		if len(self.body) > 0:
			t += '<DATA AVAILABLE %s bytes>' % len(self.body)
		return t

	@staticmethod
	def from_bytes(data:bytes):
		try:
			req = HTTPRequest()
			marker = data.find(HEADER_TERMINATOR)
			if marker == -1:
				raise ValueError('Header terminator not found')

			lines = data[:marker].decode('utf-8').split('\r\n')
			request_line = lines[0].split(' ')
			if len(request_line) < 2:
				raise ValueError('Malformed request line %r' % lines[0])
			req.method = request_line[0]
			req.path = request_line[1]
			if len(request_line) > 2:
				req.version = request_line[2]

			req.header_lines = lines[1:]
			for line in req.header_lines:
				if line.find(':') == -1:
					continue
				key, value = line.split(':', 1)
				key = key.strip()
				value = value.strip()
				req.headers_upper[key.upper()] = value

			req.body = data[marker + len(HEADER_TERMINATOR):]
			return req, None

		except Exception as e:
			return None, e


class HTTPResponse:
	def __init__(self, status:int, body = b'', content_type:str = 'text/plain; charset=utf-8', headers:List[Tuple[str, str]] = None):
		self.status = status
		self.content_type = content_type
		if isinstance(body, str):
			body = body.encode('utf-8')
		self.body:bytes = body
		self.headers:List[Tuple[str, str]] = headers
		if headers is None:
			self.headers = []

	@property
	def reason(self):
		if self.status == 200:
			return 'OK'
		return 'Error'

	def __str__(self):
		return '%s %s (%s bytes)' % (self.status, self.reason, len(self.body))

	@staticmethod
	def text(status:int, body:str):
		return HTTPResponse(status, body)

	@staticmethod
	def json(body:str, status:int = 200):
		return HTTPResponse(status, body, content_type = 'application/json; charset=utf-8')

	@staticmethod
	def html(body:bytes):
		return HTTPResponse(200, body, content_type = 'text/html; charset=utf-8')

	@staticmethod
	def cors_preflight():
		return HTTPResponse(200, b'', content_type = None, headers = list(CORS_HEADERS))

	def to_bytes(self):
		# Content-Length counts encoded bytes, never characters
		t = 'HTTP/1.1 %s %s\r\n' % (self.status, self.reason)
		if self.content_type is not None:
			t += 'Content-Type: %s\r\n' % self.content_type
		t += 'Content-Length: %s\r\n' % len(self.body)
		for key, value in self.headers:
			t += '%s: %s\r\n' % (key, value)
		t += 'Connection: close\r\n'
		t += '\r\n'
		return t.encode('utf-8') + self.body
