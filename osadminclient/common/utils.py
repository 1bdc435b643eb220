import hashlib
import json

from oslo_utils import encodeutils
from oslo_utils import strutils

from osadminclient import exc

SENSITIVE_HEADERS = ('X-Auth-Token', )


def safe_header(name, value):
    if value is not None and name in SENSITIVE_HEADERS:
        h = hashlib.sha1(encodeutils.safe_encode(value))
        d = h.hexdigest()
        return name, "{SHA1}%s" % d
    else:
        return name, value


def normalize_url_kind(which):
    """Return the catalog key for an endpoint kind.

    ``admin`` and ``adminURL`` both name the ``adminURL`` key.
    """
    if 'URL' not in which:
        which += 'URL'
    return which


def extract(body, key):
    """Return the object stored under ``key`` in a decoded response body."""
    if not isinstance(body, dict) or not isinstance(body.get(key), dict):
        raise exc.MalformedResponse(
            message="Expected a '%s' object in the response." % key)
    return body[key]


def project(model_cls, data, fields):
    """Build ``model_cls`` from the ``fields`` of ``data``, dropping others.

    Fields missing from ``data`` are set to None.
    """
    try:
        return model_cls(dict((k, data.get(k)) for k in fields))
    except ValueError as e:
        raise exc.MalformedResponse(
            message="Invalid %s in the response: %s" % (model_cls.__name__, e))


def mask_body(data, secret='***'):
    """Return a JSON body fit for logging, with credentials masked.

    Passwords, EC2 secrets and the token id of an authentication response
    are replaced by ``secret``. Bodies that are not JSON objects go through
    :func:`oslo_utils.strutils.mask_password`.
    """
    try:
        doc = json.loads(data)
    except ValueError:
        return strutils.mask_password(data, secret=secret)
    if not isinstance(doc, dict):
        return strutils.mask_password(data, secret=secret)
    doc = strutils.mask_dict_password(doc, secret=secret)
    access = doc.get('access')
    if isinstance(access, dict) and isinstance(access.get('token'), dict):
        if 'id' in access['token']:
            access['token']['id'] = secret
    return json.dumps(doc)
