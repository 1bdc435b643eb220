import logging

import warlock

from osadminclient import exc

LOG = logging.getLogger(__name__)

SCHEMA = {
    'name': 'Network',
    'properties': {
        'id': {'type': 'string', 'minLength': 1},
        'project_id': {'type': ['string', 'null']},
        'label': {'type': ['string', 'null']},
        'cidr': {'type': ['string', 'null']},
    },
    'required': ['id'],
    'additionalProperties': True
}


class Controller(object):
    """Operations on the networks of the compute service.

    :param api: the :class:`osadminclient.compute.client.Client`, which
                provides the http client once the compute endpoint has been
                resolved from the session.
    """
    def __init__(self, api):
        self.api = api

    def model(self, network):
        Network = warlock.model_factory(SCHEMA)
        try:
            return Network(network)
        except (TypeError, ValueError) as e:
            raise exc.MalformedResponse(
                message="Invalid network in the response: %s" % e)

    def list(self):
        """Retrieve a listing of Network objects."""
        resp, body = self.api.http_client.get('/os-networks',
                                              raise_exc=False)
        if resp.status_code != 200:
            LOG.debug("Failed to get the list of all networks, status: %s",
                      resp.status_code)
            raise exc.from_response(resp, resp.content)
        if (not isinstance(body, dict) or
                not isinstance(body.get('networks'), list)):
            raise exc.MalformedResponse(
                message="Failed to get the list of all networks, the "
                        "server did not respond a valid JSON.")
        return [self.model(network) for network in body['networks']]

    def find_by_tenant(self, tenant_id):
        """Return the first network associated with the given tenant.

        :raises NetworkNotFound: no network belongs to the tenant.
        """
        for network in self.list():
            if network.get('project_id') == tenant_id:
                return network
        raise exc.NetworkNotFound()

    def disassociate(self, tenant_id):
        """Disassociate the network of a tenant, without deleting it.

        :raises NetworkNotFound: the tenant has no network, so there is
                                 nothing to disassociate.
        """
        network = self.find_by_tenant(tenant_id)
        url = '/os-networks/%s/action' % network.id
        resp, body = self.api.http_client.post(
            url, data={'disassociate': None},
            headers={'Accept': 'application/json'}, raise_exc=False)
        if resp.status_code != 202:
            LOG.debug("Failed to disassociate the network %s from the "
                      "tenant %s, status: %s", network.id, tenant_id,
                      resp.status_code)
            raise exc.from_response(resp, resp.content)
        LOG.info("Network %s disassociated from tenant %s",
                 network.id, tenant_id)
