import copy
import json
import logging
import socket

from oslo_utils import encodeutils
from oslo_utils import netutils
import requests

from osadminclient.common import utils
from osadminclient import exc

LOG = logging.getLogger(__name__)
USER_AGENT = 'python-osadminclient'


class HTTPClient(object):
    """Sends requests relative to ``endpoint``.

    :param endpoint: base URL that request paths are appended to.
    :param session: :class:`osadminclient.session.Session` whose token is
                    sent in the ``X-Auth-Token`` header, or None to send
                    requests without a token.
    """

    def __init__(self, endpoint, session=None, **kwargs):
        parts = self.parse_endpoint(endpoint)
        if not parts.scheme or not parts.netloc:
            raise exc.InvalidEndpoint(
                message="Invalid endpoint: %r" % (endpoint,))
        self.endpoint = endpoint
        self.auth_token = session.get_token() if session else None
        self.session = requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

        if self.auth_token:
            self.session.headers["X-Auth-Token"] = self.auth_token

        self.timeout = float(kwargs.get('timeout', 600))

        if self.endpoint.startswith("https"):
            if kwargs.get('insecure', False) is True:
                self.session.verify = False
            elif kwargs.get('cacert'):
                self.session.verify = kwargs['cacert']

            if kwargs.get('cert_file'):
                self.session.cert = (kwargs.get('cert_file'),
                                     kwargs.get('key_file'))

    @staticmethod
    def parse_endpoint(endpoint):
        return netutils.urlsplit(endpoint)

    def log_curl_request(self, method, url, headers, data):
        curl = ['curl -g -i -X %s' % method]

        headers = copy.deepcopy(headers)
        headers.update(self.session.headers)

        for (key, value) in headers.items():
            header = '-H \'%s: %s\'' % utils.safe_header(key, value)
            curl.append(header)

        if not self.session.verify:
            curl.append('-k')
        elif isinstance(self.session.verify, str):
            curl.append(' --cacert %s' % self.session.verify)

        if self.session.cert:
            curl.append(' --cert %s --key %s' % self.session.cert)

        if data and isinstance(data, str):
            curl.append('-d \'%s\'' % utils.mask_body(data))

        curl.append(url)

        msg = ' '.join([encodeutils.safe_decode(item, errors='ignore')
                        for item in curl])
        LOG.debug(msg)

    @staticmethod
    def log_http_response(resp):
        status = (resp.raw.version / 10.0, resp.status_code, resp.reason)
        dump = ['\nHTTP/%.1f %s %s' % status]
        headers = resp.headers.items()
        dump.extend(['%s: %s' % utils.safe_header(k, v) for k, v in headers])
        dump.append('')
        content_type = resp.headers.get('Content-Type')

        if content_type != 'application/octet-stream':
            dump.extend([utils.mask_body(resp.text), ''])
        LOG.debug('\n'.join([encodeutils.safe_decode(x, errors='ignore')
                             for x in dump]))

    @staticmethod
    def _decode_body(resp):
        """Decode a JSON response body, returning None when it is not JSON."""
        if not resp.content:
            return None
        try:
            return json.loads(resp.text)
        except ValueError:
            return None

    def _handle_response(self, resp, raise_exc=True):
        if raise_exc and not 200 <= resp.status_code < 300:
            LOG.debug("Request returned failure status %s." % resp.status_code)
            raise exc.from_response(resp, resp.content)

        return resp, self._decode_body(resp)

    def _request(self, method, url, raise_exc=True, **kwargs):
        """Send an http request with the specified characteristics.

        Wrapper around requests.Session.request to handle tasks such as
        setting headers and error handling. Returns the response and its
        decoded JSON body (None if the body is not JSON). When ``raise_exc``
        is false, the caller is responsible for checking the status code.
        """
        headers = copy.deepcopy(kwargs.pop('headers', {}))

        data = kwargs.pop("data", None)

        if data is not None:
            if not isinstance(data, str):
                data = json.dumps(data, separators=(',', ':'))
            headers['Content-Type'] = 'application/json'

        conn_url = "%s/%s" % (self.endpoint.rstrip("/"), url.lstrip("/"))

        self.log_curl_request(method, conn_url, headers, data)

        kwargs.setdefault('timeout', self.timeout)
        try:
            resp = self.session.request(method,
                                        conn_url,
                                        data=data,
                                        headers=headers,
                                        **kwargs)
        except requests.exceptions.Timeout as e:
            message = ("Error communicating with %(url)s: %(e)s" %
                       dict(url=conn_url, e=e))
            raise exc.InvalidEndpoint(message=message)
        except requests.exceptions.ConnectionError as e:
            message = ("Error finding address for %(url)s: %(e)s" %
                       dict(url=conn_url, e=e))
            raise exc.CommunicationError(message=message)
        except socket.gaierror as e:
            message = "Error finding address for %s: %s" % (conn_url, e)
            raise exc.InvalidEndpoint(message=message)
        except (socket.error, socket.timeout) as e:
            message = ("Error communicating with %(endpoint)s %(e)s" %
                       {'endpoint': self.endpoint, 'e': e})
            raise exc.CommunicationError(message=message)

        try:
            self.log_http_response(resp)
            return self._handle_response(resp, raise_exc=raise_exc)
        finally:
            resp.close()

    def head(self, url, **kwargs):
        return self._request('HEAD', url, **kwargs)

    def get(self, url, **kwargs):
        return self._request('GET', url, **kwargs)

    def post(self, url, **kwargs):
        return self._request('POST', url, **kwargs)

    def put(self, url, **kwargs):
        return self._request('PUT', url, **kwargs)

    def patch(self, url, **kwargs):
        return self._request('PATCH', url, **kwargs)

    def delete(self, url, **kwargs):
        return self._request('DELETE', url, **kwargs)


def get_http_client(endpoint, session=None, **kwargs):
    return HTTPClient(endpoint, session, **kwargs)
