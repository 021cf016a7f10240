from setuptools import setup, find_packages
import re

VERSIONFILE="wifiupload/_version.py"
verstrline = open(VERSIONFILE, "rt").read()
VSRE = r"^__version__ = ['\"]([^'\"]*)['\"]"
mo = re.search(VSRE, verstrline, re.M)
if mo:
    verstr = mo.group(1)
else:
    raise RuntimeError("Unable to find version string in %s." % (VERSIONFILE,))


setup(
	# Application name:
	name="wifiupload",

	# Version number (initial):
	version=verstr,

	# Packages
	packages=find_packages(exclude=["tests", "tests.*"]),

	# Include additional files into the package
	include_package_data=True,

	zip_safe = True,
	#
	# license="LICENSE.txt",
	description="Minimal asyncio HTTP/1.1 server for uploading text files over the local network",
	long_description="",

	python_requires='>=3.10',
	classifiers=[
		"Programming Language :: Python :: 3.10",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
	],
	install_requires=[
		'h11>=0.14.0',
	],
	extras_require={
		'test': [
			'pytest',
		],
	},
	entry_points={
		'console_scripts': [
			'wifiupload-server = wifiupload.examples.uploadserver:main',
			'wifiupload-client = wifiupload.examples.uploadclient:main',
		],
	}
)
