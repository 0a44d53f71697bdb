from ..utils import star_path, path_matches


# Array alignment policies
ALIGN_IDENTITY = "identity"
ALIGN_POSITIONAL = "positional"
ALIGNMENT_POLICIES = (ALIGN_IDENTITY, ALIGN_POSITIONAL)

# Reorder detection modes
REORDER_ABSOLUTE = "absolute"
REORDER_RELATIVE = "relative"
REORDER_MODES = (REORDER_ABSOLUTE, REORDER_RELATIVE)

# objectId is the identity of every page and page element in a slide deck
DEFAULT_IDENTITY_KEYS = ("objectId", "id")


class DiffConfig:
    """Set of alignment options and path rules to pass around.

    Path rules (alignment_paths, atomic_paths, ignore_paths) are keyed
    by star paths, where any array element is written as '*', e.g.
    '/slides/*/pageElements'.
    """

    def __init__(self, *, identity_keys=None, alignment=ALIGN_IDENTITY,
                 alignment_paths=None, reorder=REORDER_ABSOLUTE, strict=False,
                 atomic_paths=None, ignore_paths=None):
        if alignment not in ALIGNMENT_POLICIES:
            raise ValueError("Unknown alignment policy %r, expected one of %r" % (
                alignment, ALIGNMENT_POLICIES))
        if reorder not in REORDER_MODES:
            raise ValueError("Unknown reorder mode %r, expected one of %r" % (
                reorder, REORDER_MODES))
        for policy in (alignment_paths or {}).values():
            if policy not in ALIGNMENT_POLICIES:
                raise ValueError("Unknown alignment policy %r" % (policy,))

        if identity_keys is None:
            identity_keys = DEFAULT_IDENTITY_KEYS
        self.identity_keys = tuple(identity_keys)
        self.alignment = alignment
        self.reorder = reorder
        self.strict = strict
        self._alignment_paths = dict(alignment_paths or {})
        self._atomic_paths = tuple(atomic_paths or ())
        self._ignore_paths = tuple(ignore_paths or ())

    def alignment_at(self, path):
        "Return the alignment policy for the array at path."
        return self._alignment_paths.get(star_path(path), self.alignment)

    def is_atomic(self, path):
        "Return True for subtrees that diff should treat as a single atomic value."
        return any(path_matches(path, p) for p in self._atomic_paths)

    def is_ignored(self, path):
        "Return True for subtrees that diff should skip entirely."
        return any(path_matches(path, p) for p in self._ignore_paths)

    def __copy__(self):
        return DiffConfig(
            identity_keys=self.identity_keys,
            alignment=self.alignment,
            alignment_paths=self._alignment_paths.copy(),
            reorder=self.reorder,
            strict=self.strict,
            atomic_paths=self._atomic_paths,
            ignore_paths=self._ignore_paths,
        )
