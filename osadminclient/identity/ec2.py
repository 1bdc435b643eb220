import warlock

from osadminclient.common import utils

FIELDS = ('access', 'secret')

SCHEMA = {
    'name': 'Ec2',
    'properties': {
        'access': {'type': 'string', 'minLength': 1},
        'secret': {'type': 'string', 'minLength': 1},
    },
    'required': ['access', 'secret'],
    'additionalProperties': True
}


class Controller(object):
    def __init__(self, http_client):
        self.http_client = http_client

    def model(self, credential):
        Ec2 = warlock.model_factory(SCHEMA)
        return utils.project(Ec2, credential, FIELDS)

    def create(self, user_id, tenant_id):
        """Issue a new EC2 credential pair for a user in a tenant.
        :param user_id:     ID of the user owning the credentials.
        :param tenant_id:   ID of the tenant the credentials are scoped to.
        """
        url = '/users/%s/credentials/OS-EC2' % user_id
        body = {'tenant_id': tenant_id}
        resp, created = self.http_client.post(url, data=body)
        return self.model(utils.extract(created, 'credential'))

    def delete(self, user_id, access):
        """Revoke an EC2 credential pair. Only the access key is needed."""
        url = '/users/%s/credentials/OS-EC2/%s' % (user_id, access)
        self.http_client.delete(url)
