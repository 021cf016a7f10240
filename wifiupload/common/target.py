import ipaddress


class ServerTarget:
	def __init__(self, ip:str = '0.0.0.0', port:int = 8080, hostname:str = None, buffer_size:int = 65536, max_request_size:int = 16*1024*1024, status_ttl:float = 3):
		self.hostname = hostname
		self.port = port
		self.buffer_size = buffer_size
		self.max_request_size = max_request_size
		self.status_ttl = status_ttl

		try:
			ipaddress.ip_address(ip)
			self.ip = ip
		except ValueError:
			if ip is not None:
				self.hostname = ip
			self.ip = None

		if self.ip is None and self.hostname is None:
			raise Exception('Both IP and Hostname can\'t be none!')

	def get_ip_or_hostname(self):
		if self.ip is not None:
			return self.ip
		return self.hostname

	def __str__(self):
		t = '==== ServerTarget ====\r\n'
		for k in self.__dict__:
			t += '%s: %s\r\n' % (k, self.__dict__[k])
		return t
