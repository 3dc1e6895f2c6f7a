"""
Utilities for splitting email addresses and finding a default email template.
"""

import logging
import socket
from dataclasses import dataclass
from typing import List, Tuple

from gitpair.core import MalformedEmail, TemplateUnavailable

logger = logging.getLogger(__name__)

# Never contacted: connecting a UDP socket only selects the outgoing interface.
_ROUTE_PROBE_ADDRESS = ('192.0.2.1', 9)


def split_email(email: str) -> Tuple[str, str]:
    """Split an email address into its local part and host.

    Raises MalformedEmail unless the address contains exactly one "@".
    Empty parts are returned as they are.
    """
    parts = email.split('@')
    if len(parts) != 2:
        raise MalformedEmail(email)
    return parts[0], parts[1]


@dataclass(frozen=True)
class EmailTemplate:
    """Address that composed pair emails are derived from.

    The local part marks an address as a composed pair address and the
    host is shared by every composed and single-user address.
    """
    local: str
    host: str

    @classmethod
    def parse(cls, email: str) -> 'EmailTemplate':
        local, host = split_email(email)
        return cls(local, host)

    def __str__(self) -> str:
        return f"{self.local}@{self.host}"


def get_primary_address() -> str:
    """Get the IP address of the interface used for outgoing traffic."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.connect(_ROUTE_PROBE_ADDRESS)
        return sock.getsockname()[0]


def lookup_reverse_dns_names(address: str) -> List[str]:
    """Find the DNS names registered for an IP address."""
    hostname, aliases, _ = socket.gethostbyaddr(address)
    return [hostname] + list(aliases)


def template_from_dns_names(dns_names: List[str]) -> str:
    """Build "git@<domain>" from the first fully-qualified name.

    The domain is the last two labels, so "host.corp.example.com."
    gives "git@example.com".
    """
    for dns_name in dns_names:
        hostname_parts = dns_name.rstrip('.').split('.')
        if len(hostname_parts) >= 2 and all(hostname_parts[-2:]):
            return "git@" + ".".join(hostname_parts[-2:])

    raise TemplateUnavailable(
        "expected a hostname to be a fully-qualified domain name: " + ",".join(dns_names)
    )


def default_email_template() -> str:
    """Determine a default email template from the current network."""
    try:
        address = get_primary_address()
        dns_names = lookup_reverse_dns_names(address)
    except OSError as e:
        raise TemplateUnavailable(f"unable to look up the local host name: {e}") from e

    logger.debug("Reverse DNS names for %s: %s", address, dns_names)
    return template_from_dns_names(dns_names)
