"""Exceptions raised by the geometry domain."""


class ContractViolation(ValueError):
    """Raised when member geometry input is malformed.

    Covers vertex-count mismatches between interpolated profiles, zero-length
    members, profiles with fewer than three vertices and boundary lists that
    cannot describe a member. No partial mesh is produced when this is raised;
    callers are expected to skip the offending member.
    """

    pass
