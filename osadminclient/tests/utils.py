"""
This module provides a fake HTTP server for unit testing the clients.

The server answers requests with responses prepared in advance, in order,
and records the requests it receives so tests can inspect them.
"""

import collections
import logging
import os
from http import server
import queue
import threading
import unittest

LOG = logging.getLogger(__name__)

QUEUE_SIZE = 64

TESTDATA = os.path.join(os.path.dirname(__file__), 'testdata')

#: A request received by the server. ``headers`` is case insensitive.
Request = collections.namedtuple('Request', ['method', 'path', 'headers'])

Response = collections.namedtuple('Response', ['status', 'headers', 'body'])


def load_testdata(name):
    with open(os.path.join(TESTDATA, name)) as f:
        return f.read()


class _Handler(server.BaseHTTPRequestHandler):

    def _handle(self):
        fake = self.server.fake
        length = int(self.headers.get('Content-Length') or 0)
        body = self.rfile.read(length) if length else b''
        fake.requests.put((Request(self.command, self.path, self.headers),
                           body))
        try:
            response = fake.responses.get(timeout=fake.response_timeout)
        except queue.Empty:
            message = "No response prepared for %s %s" % (self.command,
                                                          self.path)
            LOG.error(message)
            fake.failures.append(message)
            response = Response(500, {}, message)
        payload = response.body.encode('utf-8')
        self.send_response(response.status)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header('Content-Length', str(len(payload)))
        self.end_headers()
        if self.command != 'HEAD':
            self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_PATCH = do_DELETE = do_HEAD = _handle

    def log_message(self, format, *args):
        LOG.debug(format, *args)


class TestHTTPServer(object):
    """A programmable HTTP server listening on localhost.

    :param response_timeout: seconds a request waits for a prepared response
                             before the server gives up and answers 500.
    """
    __test__ = False

    def __init__(self, response_timeout=5):
        self.response_timeout = response_timeout
        self.responses = queue.Queue(QUEUE_SIZE)
        self.requests = queue.Queue(QUEUE_SIZE)
        self.failures = []
        self.url = None
        self._httpd = None
        self._thread = None

    def start(self):
        if self._httpd is not None:
            return
        self._httpd = server.HTTPServer(('127.0.0.1', 0), _Handler)
        self._httpd.fake = self
        self.url = 'http://127.0.0.1:%d' % self._httpd.server_address[1]
        self._thread = threading.Thread(target=self._httpd.serve_forever)
        self._thread.daemon = True
        self._thread.start()

    def stop(self):
        if self._httpd is None:
            return
        self._httpd.shutdown()
        self._httpd.server_close()
        self._thread.join()
        self._httpd = None

    def prepare_response(self, status, headers=None, body=''):
        """Queue a response. Responses are served in the order prepared."""
        self.responses.put_nowait(Response(status, headers or {}, body))

    def wait_request(self, timeout=1):
        """Return the next ``(request, body)`` received by the server."""
        try:
            return self.requests.get(timeout=timeout)
        except queue.Empty:
            raise AssertionError("No request received after %s seconds." %
                                 timeout)

    def flush_requests(self):
        """Discard the recorded requests, unused responses and failures."""
        for q in (self.requests, self.responses):
            while True:
                try:
                    q.get_nowait()
                except queue.Empty:
                    break
        del self.failures[:]


class ServerTestCase(unittest.TestCase):
    """Test case sharing one started :class:`TestHTTPServer` per class."""

    @classmethod
    def setUpClass(cls):
        super(ServerTestCase, cls).setUpClass()
        cls.server = TestHTTPServer()
        cls.server.start()

    @classmethod
    def tearDownClass(cls):
        cls.server.stop()
        super(ServerTestCase, cls).tearDownClass()

    def tearDown(self):
        failures = list(self.server.failures)
        self.server.flush_requests()
        super(ServerTestCase, self).tearDown()
        self.assertEqual([], failures)
