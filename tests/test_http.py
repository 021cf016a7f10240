import unittest

from wifiupload.protocol.http import HTTPRequest, HTTPResponse


def split_response(data:bytes):
	head, body = data.split(b'\r\n\r\n', 1)
	lines = head.decode('utf-8').split('\r\n')
	headers = {}
	for line in lines[1:]:
		key, value = line.split(': ', 1)
		headers[key] = value
	return lines[0], headers, body


class TestHTTPRequest(unittest.TestCase):
	def test_parse(self) -> None:
		req, err = HTTPRequest.from_bytes(b'POST /api/createFile HTTP/1.1\r\nHost: phone:8080\r\nContent-Type: application/json\r\n\r\n{"a":1}')
		self.assertIsNone(err)
		self.assertEqual(req.method, 'POST')
		self.assertEqual(req.path, '/api/createFile')
		self.assertEqual(req.version, 'HTTP/1.1')
		self.assertEqual(req.headers_upper['CONTENT-TYPE'], 'application/json')
		self.assertEqual(req.header_lines, ['Host: phone:8080', 'Content-Type: application/json'])
		self.assertEqual(req.body, b'{"a":1}')

	def test_missing_terminator(self) -> None:
		req, err = HTTPRequest.from_bytes(b'GET / HTTP/1.1\r\nHost: x\r\n')
		self.assertIsNone(req)
		self.assertIsNotNone(err)

	def test_unparsable_request_line(self) -> None:
		req, err = HTTPRequest.from_bytes(b'GARBAGE\r\n\r\n')
		self.assertIsNone(req)
		self.assertIsNotNone(err)

	def test_invalid_utf8_header(self) -> None:
		req, err = HTTPRequest.from_bytes(b'GET /\xff HTTP/1.1\r\n\r\n')
		self.assertIsNone(req)
		self.assertIsNotNone(err)


class TestHTTPResponse(unittest.TestCase):
	def test_content_length_counts_utf8_bytes(self) -> None:
		body = 'Grüße 📝'
		status, headers, raw_body = split_response(HTTPResponse.text(200, body).to_bytes())
		self.assertEqual(status, 'HTTP/1.1 200 OK')
		self.assertEqual(int(headers['Content-Length']), len(body.encode('utf-8')))
		self.assertNotEqual(int(headers['Content-Length']), len(body))
		self.assertEqual(raw_body.decode('utf-8'), body)
		self.assertEqual(headers['Content-Type'], 'text/plain; charset=utf-8')

	def test_error_reason(self) -> None:
		status, _, body = split_response(HTTPResponse.text(404, 'Not Found').to_bytes())
		self.assertEqual(status, 'HTTP/1.1 404 Error')
		self.assertEqual(body, b'Not Found')

	def test_cors_preflight(self) -> None:
		status, headers, body = split_response(HTTPResponse.cors_preflight().to_bytes())
		self.assertEqual(status, 'HTTP/1.1 200 OK')
		self.assertEqual(headers['Access-Control-Allow-Origin'], '*')
		self.assertEqual(headers['Access-Control-Allow-Methods'], 'GET, POST, OPTIONS')
		self.assertEqual(headers['Access-Control-Allow-Headers'], 'Content-Type')
		self.assertEqual(headers['Content-Length'], '0')
		self.assertNotIn('Content-Type', headers)
		self.assertEqual(body, b'')

	def test_header_order(self) -> None:
		data = HTTPResponse.json('[]').to_bytes()
		self.assertTrue(data.startswith(b'HTTP/1.1 200 OK\r\nContent-Type: application/json; charset=utf-8\r\nContent-Length: 2\r\n'))
		self.assertTrue(data.endswith(b'\r\n\r\n[]'))


if __name__ == "__main__":
	unittest.main()
