from osadminclient.common import http
from osadminclient import exc
from osadminclient.identity import ec2
from osadminclient.identity import roles
from osadminclient.identity import tenants
from osadminclient.identity import users


class Client(object):
    """Client for the administrative Identity v2.0 API.

    Requests are sent to the identity service the session authenticated
    against.

    :param Session session: session returned by
                            :func:`osadminclient.session.authenticate`.
    :param bool strict: check the status of every request, including the
                        role grant of :meth:`roles.Controller.add_user_role`
                        and the deletions that are best-effort by default.
    """
    def __init__(self, session, strict=False, **kwargs):
        if session is None:
            raise exc.ConfigError(message="An authenticated session is "
                                          "required.")
        self.session = session
        self.http_client = http.get_http_client(endpoint=session.auth_url,
                                                session=session, **kwargs)

        self.tenants = tenants.Controller(self.http_client, strict=strict)

        self.users = users.Controller(self.http_client, strict=strict)

        self.roles = roles.Controller(self.http_client, strict=strict)

        self.ec2 = ec2.Controller(self.http_client)
