import os

from traitlets import Unicode, Enum, Integer, Bool, HasTraits, List, TraitError, validate
from traitlets.config.loader import JSONFileConfigLoader, ConfigFileNotFound

from .diffing.config import (
    ALIGN_IDENTITY, ALIGNMENT_POLICIES, REORDER_ABSOLUTE, REORDER_MODES,
    DEFAULT_IDENTITY_KEYS,
)


CONFIG_BASENAME = 'slidediff_config'

OUTPUT_FORMATS = ('summary', 'changes', 'json', 'text', 'markdown', 'all')


class SlideDiffConfigurable(HasTraits):

    def configured_traits(self, cls):
        return {name: getattr(self, name)
                for name in cls.class_own_traits(config=True)}


_config_cache = {}
def config_instance(cls):
    try:
        return _config_cache[cls]
    except KeyError:
        instance = _config_cache[cls] = cls()
        return instance


def config_path():
    """Directories searched for config files, in descending priority order.

    These are the current directory and the user config directory,
    which is $SLIDEDIFF_CONFIG_DIR or ~/.slidediff.
    """
    user_dir = os.environ.get('SLIDEDIFF_CONFIG_DIR') or os.path.join(
        os.path.expanduser('~'), '.slidediff')
    return [os.getcwd(), user_dir]


def _load_config_files(basefilename, path):
    """Yield the non-empty json config files named basefilename found on path.

    Files are yielded lowest priority first.
    """
    for directory in reversed(path):
        loader = JSONFileConfigLoader(basefilename + '.json', path=directory)
        try:
            config = loader.load_config()
        except ConfigFileNotFound:
            continue
        if config:
            yield config


def recursive_update(target, new, include_none):
    """Merge new into target in place.

    Nested dicts are merged key by key. Unless include_none is set,
    None values remove their key and emptied sub-dicts are dropped.
    """
    for key, value in new.items():
        if isinstance(value, dict):
            sub = target.setdefault(key, {})
            recursive_update(sub, value, include_none)
            if not sub and not include_none:
                del target[key]
        elif value is None and not include_none:
            target.pop(key, None)
        else:
            target[key] = value


def build_config(entrypoint, include_none=False):
    """Collect the effective config of an entrypoint.

    Class defaults are overridden by values found in config files,
    for each configurable class the entrypoint derives from.
    """
    if entrypoint not in entrypoint_configurables:
        raise ValueError('Unknown entrypoint %r, expected one of %s' % (
            entrypoint, ', '.join(sorted(entrypoint_configurables))))

    disk_config = {}
    for c in _load_config_files(CONFIG_BASENAME, config_path()):
        recursive_update(disk_config, c, include_none)

    config = {}
    for cls in reversed(entrypoint_configurables[entrypoint].mro()):
        if not issubclass(cls, SlideDiffConfigurable):
            continue
        recursive_update(config, config_instance(cls).configured_traits(cls), include_none)
        recursive_update(config, disk_config.get(cls.__name__, {}), include_none)
    return config


def get_defaults_for_argparse(entrypoint):
    return build_config(entrypoint)


class Global(SlideDiffConfigurable):

    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'INFO',
        help="Set the log level by name.",
    ).tag(config=True)


class Diffing(SlideDiffConfigurable):

    identity_keys = List(
        Unicode(),
        default_value=list(DEFAULT_IDENTITY_KEYS),
        help="Candidate identity fields for aligning array elements, in order of preference.",
    ).tag(config=True)

    alignment = Enum(
        ALIGNMENT_POLICIES,
        ALIGN_IDENTITY,
        help="How to align array elements: by identity field, or by position only.",
    ).tag(config=True)

    reorder = Enum(
        REORDER_MODES,
        REORDER_ABSOLUTE,
        help="When to report a moved element: whenever its index changes (absolute), "
             "or only when its order relative to the other kept elements changes (relative).",
    ).tag(config=True)

    strict = Bool(
        False,
        help="Fail on duplicate identities instead of aligning them by position.",
    ).tag(config=True)

    ignore = List(
        Unicode(),
        default_value=[],
        help="Paths to leave out of the diff, e.g. /revisionId or /slides/*/revisionId.",
    ).tag(config=True)

    atomic = List(
        Unicode(),
        default_value=[],
        help="Paths whose values are compared as a whole.",
    ).tag(config=True)

    @validate('ignore', 'atomic')
    def _validate_paths(self, proposal):
        for p in proposal['value']:
            if not p.startswith('/'):
                raise TraitError('path rules need to start with `/`, got %r' % (p,))
        return proposal['value']


class Output(SlideDiffConfigurable):

    format = Enum(
        OUTPUT_FORMATS,
        'summary',
        help="Which projection of the diff to print.",
    ).tag(config=True)

    details = Bool(
        False,
        help="Describe every change below the summary.",
    ).tag(config=True)

    context = Integer(
        3,
        min=0,
        help="Number of unchanged lines around changes in text diffs.",
    ).tag(config=True)

    color = Bool(
        False,
        help="Colorize text output.",
    ).tag(config=True)


class SlideDiff(Global, Diffing, Output):
    pass


entrypoint_configurables = {
    'slidediff': SlideDiff,
}
