import logging

import warlock

from osadminclient.common import utils
from osadminclient import exc
from osadminclient.identity import roles

LOG = logging.getLogger(__name__)

FIELDS = ('id', 'name', 'email')

SCHEMA = {
    'name': 'User',
    'properties': {
        'id': {'type': 'string', 'minLength': 1},
        'name': {'type': 'string'},
        'email': {'type': ['string', 'null']},
    },
    'required': ['id', 'name'],
    'additionalProperties': True
}


class Controller(object):
    def __init__(self, http_client, strict=False):
        self.http_client = http_client
        self.strict = strict

    def model(self, user):
        User = warlock.model_factory(SCHEMA)
        return utils.project(User, user, FIELDS)

    def create(self, name, password, email, tenant_id, role_id, enabled=True):
        """Create a user and grant it a role on a tenant.

        The user is created first, then the role is granted. If the grant
        fails the user is left in place and :class:`exc.DanglingUser` is
        raised so the caller can retry the grant or delete the user.

        :param name:        name of the user.
        :param password:    password of the user, never stored.
        :param email:       email of the user.
        :param tenant_id:   ID of the default tenant of the user.
        :param role_id:     ID of the role granted on the tenant.
        :param enabled:     whether the user is enabled.
        """
        body = {'user': {'name': name,
                         'password': password,
                         'tenantId': tenant_id,
                         'email': email,
                         'enabled': enabled}}
        resp, created_user = self.http_client.post('/users', data=body)
        user = self.model(utils.extract(created_user, 'user'))
        try:
            self.http_client.put(roles.role_url(user.id, tenant_id, role_id))
        except exc.ClientException as e:
            LOG.error("User %s was created but granting role %s on tenant "
                      "%s failed: %s", user.id, role_id, tenant_id, e)
            raise exc.DanglingUser(user, e)
        return user

    def delete(self, user_id, tenant_id, role_id):
        """Revoke the role of a user on a tenant, then delete the user.

        The identity service is known to answer the revocation with malformed
        responses, so its server errors are only logged unless the controller
        is strict. Errors deleting the user are always raised.
        """
        try:
            self.http_client.delete(roles.role_url(user_id, tenant_id,
                                                   role_id))
        except exc.HTTPException as e:
            if self.strict:
                raise
            LOG.warning("Ignoring error revoking role %s of user %s on "
                        "tenant %s: %s", role_id, user_id, tenant_id, e)
        self.http_client.delete('/users/%s' % user_id)
