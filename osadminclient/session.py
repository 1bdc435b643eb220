"""
Authentication against the identity service (v2.0) and the resulting session.

A :class:`Session` holds the token and the service catalog returned by the
identity service. It is never modified after :func:`authenticate` returns, so
it can be shared by any number of clients and threads.
"""

import collections
import logging

import warlock

from osadminclient.common import http
from osadminclient.common import utils
from osadminclient import exc

LOG = logging.getLogger(__name__)

ACCESS_SCHEMA = {
    'name': 'Access',
    'type': 'object',
    'properties': {
        'token': {
            'type': 'object',
            'properties': {
                'id': {'type': 'string', 'minLength': 1},
            },
            'required': ['id'],
        },
        'serviceCatalog': {
            'type': 'array',
            'items': {
                'type': 'object',
                'properties': {
                    'name': {'type': 'string'},
                    'type': {'type': 'string'},
                    'endpoints': {
                        'type': 'array',
                        'items': {
                            'type': 'object',
                            'additionalProperties': {'type': 'string'},
                        },
                    },
                },
                'required': ['name', 'type', 'endpoints'],
            },
        },
    },
    'required': ['token', 'serviceCatalog'],
    'additionalProperties': True,
}


#: A service of the catalog: its name, its type and its endpoints, one
#: mapping per region with keys such as ``region``, ``adminURL``,
#: ``publicURL`` and ``internalURL``.
ServiceCatalog = collections.namedtuple('ServiceCatalog',
                                        ['name', 'type', 'endpoints'])


class Session(object):
    """The token and service catalog of an authenticated user.

    :param token: the token sent as ``X-Auth-Token`` to the services.
    :param catalogs: sequence of :class:`ServiceCatalog`, in server order.
    :param auth_url: base URL of the identity service.
    :param region: endpoint selection policy. When None, the first endpoint
                   of a service is used; otherwise the first endpoint of
                   that region.
    """

    def __init__(self, token, catalogs, auth_url, region=None):
        self._token = token
        self._catalogs = tuple(catalogs)
        self._auth_url = auth_url
        self._region = region

    @property
    def token(self):
        return self._token

    @property
    def catalogs(self):
        return self._catalogs

    @property
    def auth_url(self):
        return self._auth_url

    @property
    def region(self):
        return self._region

    def get_token(self):
        return self._token

    def endpoint(self, service_type, which):
        """Return the URL of kind ``which`` for the service ``service_type``.

        ``which`` may omit the ``URL`` suffix, so ``admin`` and ``adminURL``
        are equivalent. An empty string is returned when the catalog has no
        such service, region or URL kind.

        Only the first catalog of the given type is looked at.
        """
        catalog = next((c for c in self._catalogs if c.type == service_type),
                       None)
        if catalog is None or not catalog.endpoints:
            return ''
        if self._region is None:
            endpoint = catalog.endpoints[0]
        else:
            endpoint = next((e for e in catalog.endpoints
                             if e.get('region') == self._region), {})
        return endpoint.get(utils.normalize_url_kind(which), '')

    def __repr__(self):
        return '<Session auth_url=%s catalogs=%s>' % (
            self._auth_url, [c.type for c in self._catalogs])


def _parse_error_title(body):
    try:
        title = body['error']['title']
    except (KeyError, TypeError):
        raise exc.MalformedResponse(
            message="Authentication failed and the server did not "
                    "send an error title.")
    if not isinstance(title, str):
        raise exc.MalformedResponse(
            message="Authentication failed and the server sent an "
                    "invalid error title.")
    return title


def _parse_access(body):
    if not isinstance(body, dict) or not isinstance(body.get('access'), dict):
        raise exc.MalformedResponse(
            message="The authentication response has no access document.")
    Access = warlock.model_factory(ACCESS_SCHEMA)
    try:
        return Access(body['access'])
    except ValueError as e:
        raise exc.MalformedResponse(
            message="Invalid authentication response: %s" % e)


def authenticate(username, password, tenant_name, auth_url, region=None,
                 preserve_password_in_memory=False, **kwargs):
    """Authenticate against the identity service and return a Session.

    :param username: name of the user.
    :param password: password of the user. It is sent once and never stored.
    :param tenant_name: name of the tenant the token is scoped to.
    :param auth_url: base URL of the identity service, for example
                     ``http://keystone.mycloud.com:35357/v2.0``.
    :param region: endpoint selection policy of the session (see
                   :class:`Session`).
    :param preserve_password_in_memory: only False is accepted.
    :param \\*\\*kwargs: transport options (``timeout``, ``insecure``,
                       ``cacert``, ``cert_file``, ``key_file``).
    :raises AuthFailed: the server refused the credentials.
    :raises MalformedResponse: the server response could not be decoded.
    """
    if preserve_password_in_memory:
        raise exc.ConfigError(
            message="The password can not be preserved in memory.")
    http_client = http.get_http_client(auth_url, **kwargs)
    body = {'auth': {'passwordCredentials': {'username': username,
                                             'password': password},
                     'tenantName': tenant_name}}
    LOG.debug("Authenticating user %s on tenant %s", username, tenant_name)
    resp, data = http_client.post('/tokens', data=body, raise_exc=False)
    if resp.status_code >= 400:
        raise exc.AuthFailed(message=_parse_error_title(data))
    access = _parse_access(data)
    catalogs = []
    for entry in access['serviceCatalog']:
        catalogs.append(ServiceCatalog(
            name=entry['name'],
            type=entry['type'],
            endpoints=tuple(dict(e) for e in entry['endpoints'])))
    return Session(access['token']['id'], catalogs, auth_url, region=region)
