"""Load docs-config YAML files and build docs.json configuration for Mintlify."""

import json
import sys
from dataclasses import dataclass, field
from typing import Optional

import yaml

from .navigation import process_manual_pages, scan_folder


class ConfigError(Exception):
    """Raised when a config file cannot be read or has an invalid shape."""


# Output shape of each optional site section: key -> default value
COLOR_FIELDS = {'primary': '', 'light': '', 'dark': ''}
BANNER_FIELDS = {'content': '', 'dismissible': False}
LOGO_FIELDS = {'light': '', 'dark': ''}
NAV_LINK_FIELDS = {'label': '', 'href': ''}
ANCHOR_FIELDS = {'anchor': '', 'href': '', 'icon': ''}
REDIRECT_FIELDS = {'source': '', 'destination': ''}


@dataclass
class PageEntry:
    """A navigation entry: either a page path or a named subgroup."""
    page: str = ''
    group: str = ''
    pages: list = field(default_factory=list)  # PageEntry

    @classmethod
    def from_yaml(cls, value) -> 'PageEntry':
        # Scalars are page paths; mappings are pages or subgroups
        if isinstance(value, list):
            raise ConfigError(f'invalid page entry: {value!r}')
        if not isinstance(value, dict):
            return cls(page=_as_str(value))
        return cls(
            page=_as_str(value.get('page')),
            group=_as_str(value.get('group')),
            pages=[cls.from_yaml(v) for v in _as_list(value.get('pages'), 'pages')],
        )


@dataclass
class GroupConfig:
    """A sidebar group inside a tab."""
    group: str
    folder: str = ''
    order: list = field(default_factory=list)  # file names, .mdx optional
    pages: list = field(default_factory=list)  # PageEntry


@dataclass
class TabConfig:
    """A top-level navigation tab."""
    tab: str
    icon: str = ''
    groups: list = field(default_factory=list)  # GroupConfig


@dataclass
class DocsConfig:
    """Parsed contents of one (or several merged) docs-config YAML files."""
    schema: str = ''
    theme: str = ''
    name: str = ''
    colors: dict = field(default_factory=lambda: dict(COLOR_FIELDS))
    favicon: str = ''
    banner: Optional[dict] = None
    contextual: Optional[dict] = None
    logo: Optional[dict] = None
    navbar: Optional[dict] = None
    footer: Optional[dict] = None
    integrations: Optional[dict] = None
    redirects: list = field(default_factory=list)
    tabs: list = field(default_factory=list)  # TabConfig
    global_nav: Optional[dict] = None

    def configured_folders(self) -> list[str]:
        """Folders referenced by any group, in config order."""
        folders = []
        for tab in self.tabs:
            for group in tab.groups:
                if group.folder and group.folder not in folders:
                    folders.append(group.folder)
        return folders


def load_config(path: str) -> DocsConfig:
    """Read a single YAML config file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f'error reading config file {path}: {e}') from e
    except yaml.YAMLError as e:
        raise ConfigError(f'error parsing config file {path}: {e}') from e

    if data is None:
        return DocsConfig()
    if not isinstance(data, dict):
        raise ConfigError(f'error parsing config file {path}: top level must be a mapping')

    try:
        return _parse_config(data)
    except ConfigError as e:
        raise ConfigError(f'error parsing config file {path}: {e}') from e


def merge_configs(paths: list[str]) -> DocsConfig:
    """Merge config files: site settings from the first, tabs from all in order."""
    if not paths:
        raise ConfigError('no config files given')

    merged = None
    all_tabs = []
    for path in paths:
        config = load_config(path)
        if merged is None:
            merged = config
        all_tabs.extend(config.tabs)

    merged.tabs = all_tabs
    return merged


def build_docs_json(config: DocsConfig, scan_folders: bool = False) -> dict:
    """Build a complete docs.json configuration."""
    docs = {
        "$schema": config.schema,
        "theme": config.theme,
        "name": config.name,
        "colors": config.colors,
        "favicon": config.favicon,
    }

    # Optional site sections, only when configured
    for key in ('banner', 'contextual', 'logo', 'navbar', 'footer', 'integrations'):
        value = getattr(config, key)
        if value is not None:
            docs[key] = value
    if config.redirects:
        docs["redirects"] = config.redirects

    navigation = {}
    tabs = [_build_tab(tab, scan_folders) for tab in config.tabs]
    if tabs:
        navigation["tabs"] = tabs
    if config.global_nav is not None:
        navigation["global"] = config.global_nav
    docs["navigation"] = navigation

    return docs


def _build_tab(tab: TabConfig, scan_folders: bool) -> dict:
    """Resolve a tab's groups into docs.json form."""
    result = {"tab": tab.tab}
    if tab.icon:
        result["icon"] = tab.icon

    groups = []
    for group in tab.groups:
        try:
            pages = _build_group_pages(group, scan_folders)
        except OSError as e:
            print(f"  ⚠ Error processing pages for group {group.group}: {e}", file=sys.stderr)
            continue
        if pages is None:
            continue
        groups.append({"group": group.group, "pages": pages})

    result["groups"] = groups
    return result


def _build_group_pages(group: GroupConfig, scan_folders: bool) -> Optional[list]:
    """Return the group's resolved pages, or None if the group is skipped."""
    if group.pages:
        return process_manual_pages(group.pages, group.folder)
    if scan_folders and group.folder:
        return scan_folder(group.folder, group.order)
    return None


def to_json(docs: dict) -> str:
    """Serialize docs.json the way Mintlify expects it on disk."""
    return json.dumps(docs, indent=2, ensure_ascii=False)


def write_docs_json(docs: dict, output_path: str):
    """Write docs.json to disk."""
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(to_json(docs))
        f.write('\n')


# ---- YAML parsing helpers ----

def _parse_config(data: dict) -> DocsConfig:
    config = DocsConfig(
        schema=_as_str(data.get('schema')),
        theme=_as_str(data.get('theme')),
        name=_as_str(data.get('name')),
        colors=_section(data.get('colors'), COLOR_FIELDS, 'colors') or dict(COLOR_FIELDS),
        favicon=_as_str(data.get('favicon')),
        banner=_section(data.get('banner'), BANNER_FIELDS, 'banner'),
        logo=_section(data.get('logo'), LOGO_FIELDS, 'logo'),
        redirects=[_section(r, REDIRECT_FIELDS, 'redirects')
                   for r in _as_list(data.get('redirects'), 'redirects')],
    )

    contextual = _as_mapping(data.get('contextual'), 'contextual')
    if contextual is not None:
        config.contextual = {"options": _as_list(contextual.get('options'), 'contextual.options')}

    navbar = _as_mapping(data.get('navbar'), 'navbar')
    if navbar is not None:
        config.navbar = {"links": [_section(link, NAV_LINK_FIELDS, 'navbar.links')
                                   for link in _as_list(navbar.get('links'), 'navbar.links')]}

    footer = _as_mapping(data.get('footer'), 'footer')
    if footer is not None:
        config.footer = {"socials": _as_mapping(footer.get('socials'), 'footer.socials') or {}}

    integrations = _as_mapping(data.get('integrations'), 'integrations')
    if integrations is not None:
        config.integrations = {}
        ga4 = _as_mapping(integrations.get('ga4'), 'integrations.ga4')
        if ga4 is not None:
            config.integrations["ga4"] = {"measurementId": _as_str(ga4.get('measurementId'))}

    navigation = _as_mapping(data.get('navigation'), 'navigation') or {}
    config.tabs = [_parse_tab(t) for t in _as_list(navigation.get('tabs'), 'navigation.tabs')]

    global_nav = _as_mapping(navigation.get('global'), 'navigation.global')
    if global_nav is not None:
        config.global_nav = {"anchors": [_section(a, ANCHOR_FIELDS, 'navigation.global.anchors')
                                         for a in _as_list(global_nav.get('anchors'), 'anchors')]}

    return config


def _parse_tab(value) -> TabConfig:
    tab = _as_mapping(value, 'tab') or {}
    return TabConfig(
        tab=_as_str(tab.get('tab')),
        icon=_as_str(tab.get('icon')),
        groups=[_parse_group(g) for g in _as_list(tab.get('groups'), 'groups')],
    )


def _parse_group(value) -> GroupConfig:
    group = _as_mapping(value, 'group') or {}
    return GroupConfig(
        group=_as_str(group.get('group')),
        folder=_as_str(group.get('folder')),
        order=[_as_str(name) for name in _as_list(group.get('order'), 'order')],
        pages=[PageEntry.from_yaml(p) for p in _as_list(group.get('pages'), 'pages')],
    )


def _section(value, fields: dict, name: str) -> Optional[dict]:
    """Normalize a mapping to exactly ``fields``, filling in defaults."""
    mapping = _as_mapping(value, name)
    if mapping is None:
        return None
    return {key: mapping.get(key, default) for key, default in fields.items()}


def _as_mapping(value, name: str) -> Optional[dict]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ConfigError(f'{name} must be a mapping, got {type(value).__name__}')
    return value


def _as_list(value, name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f'{name} must be a list, got {type(value).__name__}')
    return value


def _as_str(value) -> str:
    if value is None:
        return ''
    return str(value)
