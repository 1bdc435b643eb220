from oslo_utils import importutils

from osadminclient import exc

SERVICES = ('identity', 'compute')


def Client(service_type, session, **kwargs):
    """Return a client for ``service_type`` sharing ``session``.

    ``service_type`` is one of ``identity`` or ``compute``.
    """
    if service_type not in SERVICES:
        raise exc.ConfigError(
            message="Unknown service type %r, expected one of %s" %
                    (service_type, ', '.join(SERVICES)))
    client_class = importutils.import_class(
        'osadminclient.%s.client.Client' % service_type)
    return client_class(session, **kwargs)
