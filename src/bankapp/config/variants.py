"""Product variant profiles.

Both skins run on the same ledger core; a profile only decides how users
sign in and which roles can exist.
"""

from dataclasses import dataclass

from bankapp.domain.models.enums import CredentialScheme, ProductVariant, Role


@dataclass(frozen=True)
class VariantProfile:
    variant: ProductVariant
    credential_scheme: CredentialScheme
    roles: frozenset[Role]

    @property
    def has_staff(self) -> bool:
        return Role.MANAGER in self.roles or Role.CLERK in self.roles


PROFILES: dict[ProductVariant, VariantProfile] = {
    ProductVariant.ATM: VariantProfile(
        variant=ProductVariant.ATM,
        credential_scheme=CredentialScheme.PIN,
        roles=frozenset({Role.USER}),
    ),
    ProductVariant.BANK: VariantProfile(
        variant=ProductVariant.BANK,
        credential_scheme=CredentialScheme.PASSWORD,
        roles=frozenset({Role.USER, Role.CLERK, Role.MANAGER}),
    ),
}


def get_profile(variant: ProductVariant) -> VariantProfile:
    return PROFILES[ProductVariant(variant)]
