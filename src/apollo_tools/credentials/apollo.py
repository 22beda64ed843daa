"""
Apollo.io tool credentials.
"""

from .base import CredentialSpec

APOLLO_CREDENTIALS = {
    "apollo": CredentialSpec(
        env_var="APOLLO_API_KEY",
        tools=[
            "searchPeopleContacts",
            "enrichOrganization",
        ],
        required=True,
        help_url="https://app.apollo.io/#/settings/integrations/api",
    ),
}
