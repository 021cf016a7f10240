
__version__ = "0.1.0"
__banner__ = \
"""
# wifiupload %s 
# Local network text upload server
""" % __version__
