"""
Green configuration: load, validate, and provide defaults.

Settings come from an optional greens.yaml file and from the command
line; command-line values win.
"""

import os
import re

import yaml


# Fields required before a build can start
REQUIRED_FIELDS = ["title", "author", "output"]

# Defaults applied if missing
DEFAULTS = {
    "lang": "en",
    "cover": None,
    "subjects": [],
    "files": [],
    "green_color": "#2CAF26",
    "spoiler_color": "#000",
}

# Keys holding paths that are relative to the YAML file
PATH_FIELDS = ["cover", "output"]

COLOR_FIELDS = ["green_color", "spoiler_color"]

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
FUNCTION_COLOR = re.compile(r"^(?:rgba?|hsla?)\(\s*[0-9.,%\s/a-z-]+\)$")

# CSS Color Module Level 4 keywords, compared case-insensitively
NAMED_COLORS = frozenset("""
    aliceblue antiquewhite aqua aquamarine azure beige bisque black
    blanchedalmond blue blueviolet brown burlywood cadetblue chartreuse
    chocolate coral cornflowerblue cornsilk crimson cyan darkblue darkcyan
    darkgoldenrod darkgray darkgreen darkgrey darkkhaki darkmagenta
    darkolivegreen darkorange darkorchid darkred darksalmon darkseagreen
    darkslateblue darkslategray darkslategrey darkturquoise darkviolet
    deeppink deepskyblue dimgray dimgrey dodgerblue firebrick floralwhite
    forestgreen fuchsia gainsboro ghostwhite gold goldenrod gray green
    greenyellow grey honeydew hotpink indianred indigo ivory khaki lavender
    lavenderblush lawngreen lemonchiffon lightblue lightcoral lightcyan
    lightgoldenrodyellow lightgray lightgreen lightgrey lightpink
    lightsalmon lightseagreen lightskyblue lightslategray lightslategrey
    lightsteelblue lightyellow lime limegreen linen magenta maroon
    mediumaquamarine mediumblue mediumorchid mediumpurple mediumseagreen
    mediumslateblue mediumspringgreen mediumturquoise mediumvioletred
    midnightblue mintcream mistyrose moccasin navajowhite navy oldlace olive
    olivedrab orange orangered orchid palegoldenrod palegreen paleturquoise
    palevioletred papayawhip peachpuff peru pink plum powderblue purple
    rebeccapurple red rosybrown royalblue saddlebrown salmon sandybrown
    seagreen seashell sienna silver skyblue slateblue slategray slategrey
    snow springgreen steelblue tan teal thistle tomato turquoise violet
    wheat white whitesmoke yellow yellowgreen
    transparent currentcolor
""".split())


class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""
    pass


def is_valid_color(value):
    """Accept CSS hex colors, named colors, and rgb()/hsl() forms."""
    if not isinstance(value, str):
        return False
    value = value.strip()
    return bool(
        HEX_COLOR.match(value)
        or value.lower() in NAMED_COLORS
        or FUNCTION_COLOR.match(value)
    )


class GreenConfig:
    """
    Loaded, validated build configuration.

    Usage:
        config = GreenConfig.load("greens.yaml", overrides={"output": "out.epub"})
        config.title          # "Anon's adventures"
        config.subjects       # ["greentext"]
        config.get("cover")   # None if not set
    """

    def __init__(self, data, base_dir=None):
        self._data = data
        self.base_dir = base_dir

    @classmethod
    def load(cls, yaml_path, overrides=None):
        """Load greens.yaml and merge command-line overrides on top."""
        if not os.path.exists(yaml_path):
            raise ConfigError(f"No config file found at {yaml_path}")

        try:
            with open(yaml_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"{yaml_path} is not valid YAML: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"{yaml_path} must be a YAML mapping, got {type(data).__name__}"
            )

        base_dir = os.path.dirname(os.path.abspath(yaml_path))
        data = _resolve_paths(data, base_dir)

        for key, value in (overrides or {}).items():
            if value is not None and value != []:
                data[key] = value

        return cls.from_mapping(data, base_dir=base_dir)

    @classmethod
    def from_mapping(cls, data, base_dir=None):
        """Validate a plain dict and apply defaults."""
        data = {key: value for key, value in data.items() if value is not None}

        missing = [key for key in REQUIRED_FIELDS if not data.get(key)]
        if missing:
            raise ConfigError(f"missing required fields: {', '.join(missing)}")

        for key, default in DEFAULTS.items():
            data.setdefault(key, default if not isinstance(default, (list, dict)) else type(default)(default))

        for key in ("subjects", "files"):
            if isinstance(data[key], str):
                data[key] = [data[key]]
            if not isinstance(data[key], list):
                raise ConfigError(f"'{key}' must be a list, got {type(data[key]).__name__}")
            data[key] = [str(item) for item in data[key]]

        for key in COLOR_FIELDS:
            if not is_valid_color(data[key]):
                raise ConfigError(f"'{key}' is not a valid CSS color: {data[key]!r}")
            data[key] = data[key].strip()

        for key in ("title", "author", "lang"):
            data[key] = str(data[key])

        return cls(data, base_dir)

    # ── Attribute access ───────────────────────────────────

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"GreenConfig has no field '{name}'")

    def get(self, key, default=None):
        return self._data.get(key, default)

    def __getitem__(self, key):
        return self._data[key]

    def __contains__(self, key):
        return key in self._data

    # ── Convenience ────────────────────────────────────────

    def summary(self, reporter):
        """Report a short config summary."""
        reporter.info(f"  Title:  {self.title}")
        reporter.info(f"  Author: {self.author}")
        if self.subjects:
            reporter.info(f"  Tags:   {', '.join(self.subjects)}")
        if self.cover:
            reporter.info(f"  Cover:  {self.cover}")
        reporter.info(f"  Output: {self.output}")


def _resolve_paths(data, base_dir):
    """Make relative paths in a YAML file relative to that file."""
    data = dict(data)
    for key in PATH_FIELDS:
        value = data.get(key)
        if isinstance(value, str) and value and not os.path.isabs(value):
            data[key] = os.path.join(base_dir, value)

    files = data.get("files")
    if isinstance(files, str):
        files = [files]
    if isinstance(files, list):
        data["files"] = [
            item if os.path.isabs(str(item)) else os.path.join(base_dir, str(item))
            for item in files
        ]
    return data
