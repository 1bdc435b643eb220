import logging

import warlock

from osadminclient.common import utils
from osadminclient import exc

LOG = logging.getLogger(__name__)

FIELDS = ('id', 'name', 'description')

SCHEMA = {
    'name': 'Tenant',
    'properties': {
        'id': {'type': 'string', 'minLength': 1},
        'name': {'type': 'string'},
        'description': {'type': ['string', 'null']},
    },
    'required': ['id', 'name'],
    'additionalProperties': True
}


class Controller(object):
    def __init__(self, http_client, strict=False):
        self.http_client = http_client
        self.strict = strict

    def model(self, tenant):
        Tenant = warlock.model_factory(SCHEMA)
        return utils.project(Tenant, tenant, FIELDS)

    def create(self, name, description='', enabled=True):
        """Create a tenant with the given name.
        :param name:            name of the tenant.
        :param description:     description of the tenant.
        :param enabled:         whether the tenant is enabled.
        """
        url = '/tenants'
        body = {'tenant': {'name': name,
                           'description': description,
                           'enabled': enabled}}
        resp, created_tenant = self.http_client.post(url, data=body)
        return self.model(utils.extract(created_tenant, 'tenant'))

    def delete(self, tenant_id):
        """Delete a tenant.

        The identity service is known to answer this request with malformed
        responses, so server errors are only logged unless the controller is
        strict.
        """
        url = '/tenants/%s' % tenant_id
        try:
            self.http_client.delete(url)
        except exc.HTTPException as e:
            if self.strict:
                raise
            LOG.warning("Ignoring error removing tenant %s: %s", tenant_id, e)
