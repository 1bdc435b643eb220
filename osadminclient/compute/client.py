from osadminclient.common import http
from osadminclient.compute import networks
from osadminclient import exc


class Client(object):
    """Client for the Compute v2 API.

    The endpoint is the compute ``adminURL`` of the session's service
    catalog. It is resolved on the first request, so a client built without
    a session only fails when it is used.

    :param Session session: session returned by
                            :func:`osadminclient.session.authenticate`.
    """
    def __init__(self, session, **kwargs):
        self.session = session
        self._http_kwargs = kwargs
        self._http_client = None

        self.networks = networks.Controller(self)

    @property
    def http_client(self):
        if self._http_client is None:
            if self.session is None:
                raise exc.ConfigError(message="The compute client has no "
                                              "session.")
            endpoint = self.session.endpoint('compute', 'admin')
            if not endpoint:
                raise exc.ConfigError(message="No compute admin endpoint in "
                                              "the service catalog.")
            self._http_client = http.get_http_client(
                endpoint=endpoint, session=self.session, **self._http_kwargs)
        return self._http_client

    def disassociate_network(self, tenant_id):
        return self.networks.disassociate(tenant_id)
