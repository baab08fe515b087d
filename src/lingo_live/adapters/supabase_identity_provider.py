"""Supabase Auth anonymous identity provider."""

from collections.abc import Callable
from dataclasses import dataclass

from supabase import Client, create_client

from lingo_live.services.identity import IdentityProvider


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Identity provider backed by Supabase anonymous sign-in.

    Every sign-in runs on its own client so widget sessions never share the
    auth state a Supabase client keeps after signing in.
    """

    client_factory: Callable[[], Client]

    @classmethod
    def create(cls, supabase_url: str, anon_key: str) -> "SupabaseIdentityProvider":
        """Create a provider that signs in with the project's anon key."""
        return cls(client_factory=lambda: create_client(supabase_url, anon_key))

    def sign_in_anonymously(self) -> str:
        """Sign in anonymously and return the issued user id."""
        client = self.client_factory()
        response = client.auth.sign_in_anonymously()
        if response.user is None:
            raise RuntimeError("Supabase returned no user for anonymous sign-in")
        return str(response.user.id)
