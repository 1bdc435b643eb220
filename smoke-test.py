#!/usr/bin/env python3
from osadminclient import client as os_client
from osadminclient import exc
from osadminclient import session
import argparse
import os
import sys
import logging
from os.path import join, dirname
from dotenv import load_dotenv

logger = logging.getLogger("smoketests")

REQUIRED_ENV = ("KEYSTONE_AUTH_URL", "KEYSTONE_USER", "KEYSTONE_TENANT",
                "KEYSTONE_PASSWORD", "KEYSTONE_MEMBER_ROLE")


class SmokeTest(object):
    def __init__(self, auth_url, username, tenant, password, member_role,
                 strict=False):
        self.auth_url = auth_url
        self.username = username
        self.tenant = tenant
        self.password = password
        self.member_role = member_role
        self.strict = strict

    def start(self):
        keystone = self.__authenticate()
        tenant = keystone.tenants.create("smoketests", "smoking", True)
        print("Tenant smoketests created.")
        try:
            user = keystone.users.create("smoketests", "smoketests",
                                         "smoketests@tsuru.org", tenant.id,
                                         self.member_role, True)
        except exc.DanglingUser as e:
            logger.error("Role grant failed, removing user %s", e.user.id)
            keystone.users.delete(e.user.id, tenant.id, self.member_role)
            raise
        print("User smoketests created.")
        ec2 = keystone.ec2.create(user.id, tenant.id)
        print("Credentials for user smoketests generated.")
        keystone.ec2.delete(user.id, ec2.access)
        print("Credentials for user smoketests removed.")
        keystone.users.delete(user.id, tenant.id, self.member_role)
        print("User smoketests removed.")
        keystone.tenants.delete(tenant.id)
        print("Tenant smoketests removed.")

    def __authenticate(self):
        logger.info("Start authentication with %s", self.auth_url)
        sess = session.authenticate(self.username, self.password,
                                    self.tenant, self.auth_url)
        logger.info("Create keystone client")
        return os_client.Client('identity', sess, strict=self.strict)


def get_env(name):
    value = os.environ.get(name)
    if not value:
        print("You must define the environment variable %s." % name)
        sys.exit(3)
    return value


# Main Execution
def main():
    logging.basicConfig()
    parser = argparse.ArgumentParser(
        description='Smoke tests against a real identity service')
    parser.add_argument('--strict', help='Report every server error',
                        action='store_true', default=False)
    parser.add_argument('--debug', help='Log HTTP requests and responses',
                        action='store_true', default=False)
    args = parser.parse_args()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    dotenv_path = join(dirname(__file__), '.env')
    load_dotenv(dotenv_path)
    auth_url, username, tenant, password, member_role = [
        get_env(name) for name in REQUIRED_ENV]

    try:
        SmokeTest(auth_url, username, tenant, password, member_role,
                  strict=args.strict).start()
    except exc.ClientException as e:
        print("Error running the smoke tests. Error:", e)
        sys.exit(1)
    print("Smoke tests completed successfully")
    sys.exit(0)

if __name__ == "__main__":
    main()
