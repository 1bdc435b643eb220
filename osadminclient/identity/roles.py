ROLE_URL = '/tenants/%(tenant_id)s/users/%(user_id)s/roles/OS-KSADM/%(role_id)s'


def role_url(user_id, tenant_id, role_id):
    return ROLE_URL % {'tenant_id': tenant_id,
                       'user_id': user_id,
                       'role_id': role_id}


class Controller(object):
    def __init__(self, http_client, strict=False):
        self.http_client = http_client
        self.strict = strict

    def add_user_role(self, user_id, tenant_id, role_id):
        """Grant a role to a user on a tenant.

        Granting is idempotent on the server. Only transport errors are
        raised unless the controller is strict.
        """
        self.http_client.put(role_url(user_id, tenant_id, role_id),
                             raise_exc=self.strict)

    def remove_user_role(self, user_id, tenant_id, role_id):
        """Revoke a role from a user on a tenant."""
        self.http_client.delete(role_url(user_id, tenant_id, role_id))
