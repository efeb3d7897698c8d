"""HTML rendering of row action links."""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import jinja2
import structlog

from ..config import RowActionsSettings
from ..host.base import Host
from .base import ActionDefinition, AsyncCallback, StaticUrl, UrlResolver, nonce_action


logger = structlog.get_logger(__name__)

ALLOWED_URL_SCHEMES = frozenset(
    {
        "http", "https", "ftp", "ftps", "mailto", "news", "irc", "gopher",
        "nntp", "feed", "telnet", "mms", "rtsp", "sms", "svn", "tel", "fax",
        "xmpp", "webcal", "urn",
    }
)

_ICON = (
    '{% if icon %}<span class="{{ icon_class_prefix }}{{ icon }}"></span> {% endif %}'
)

TEMPLATES = {
    "async_link.html": (
        '<a href="#" class="{{ css_class }}"'
        ' data-object-type="{{ object_type }}"'
        ' data-object-subtype="{{ object_subtype }}"'
        ' data-action-key="{{ action_key }}"'
        ' data-object-id="{{ object_id }}"'
        ' data-nonce="{{ nonce }}"'
        ' data-confirm="{{ confirm }}">' + _ICON + "{{ label }}</a>"
    ),
    "url_link.html": (
        '<a href="{{ url }}" class="{{ css_class }}"'
        '{% if link_target %} target="{{ link_target }}"{% endif %}>'
        + _ICON + "{{ label }}</a>"
    ),
}

_environment = jinja2.Environment(
    loader=jinja2.DictLoader(TEMPLATES),
    autoescape=True,
    undefined=jinja2.StrictUndefined,
)


def sanitize_url(url: str) -> str:
    """Strip whitespace and drop URLs with a disallowed scheme."""
    url = url.strip()
    if not url:
        return ""

    scheme = urlsplit(url).scheme.lower()
    if scheme and scheme not in ALLOWED_URL_SCHEMES:
        logger.warning("Dropped URL with disallowed scheme", scheme=scheme)
        return ""
    return url


def add_query_arg(url: str, name: str, value: object) -> str:
    """Set one query argument on a URL, replacing any existing value."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != name]
    query.append((name, str(value)))
    return urlunsplit(parts._replace(query=urlencode(query)))


class LinkBuilder:
    """Renders the anchor for one action on one object."""

    def __init__(self, host: Host, settings: RowActionsSettings) -> None:
        self.host = host
        self.settings = settings

    def resolve_label(self, action: ActionDefinition, object_id: int) -> str:
        if action.label_resolver is not None:
            label = action.label_resolver(object_id)
            return "" if label is None else str(label)
        return action.label

    def resolve_url(self, action: ActionDefinition, object_id: int) -> str:
        target = action.target

        if isinstance(target, UrlResolver):
            url = target.resolver(object_id) or ""
        elif isinstance(target, StaticUrl):
            url = (
                add_query_arg(target.url, self.settings.object_id_param, object_id)
                if target.url
                else "#"
            )
        else:
            raise TypeError(f"Action '{action.key}' has no URL target")

        return sanitize_url(str(url))

    def build(
        self,
        action: ActionDefinition,
        object_type: str,
        object_subtype: str,
        object_id: int,
    ) -> str:
        """Render the link HTML for an action.

        Args:
            action: The action definition
            object_type: Object type of the listing
            object_subtype: Object subtype of the listing
            object_id: ID of the row object

        Returns:
            Anchor HTML with label and attributes escaped
        """
        label = self.resolve_label(action, object_id)

        if isinstance(action.target, AsyncCallback):
            return self._build_async(action, object_type, object_subtype, object_id, label)
        return self._build_url(action, object_id, label)

    def _build_async(
        self,
        action: ActionDefinition,
        object_type: str,
        object_subtype: str,
        object_id: int,
        label: str,
    ) -> str:
        nonce = self.host.create_nonce(
            nonce_action(object_type, object_subtype, action.key, object_id)
        )
        css_class = " ".join(c for c in (self.settings.trigger_class, action.css_class) if c)

        return _environment.get_template("async_link.html").render(
            css_class=css_class,
            object_type=object_type,
            object_subtype=object_subtype,
            action_key=action.key,
            object_id=object_id,
            nonce=nonce,
            confirm=action.confirm,
            icon=action.icon,
            icon_class_prefix=self.settings.icon_class_prefix,
            label=label,
        )

    def _build_url(self, action: ActionDefinition, object_id: int, label: str) -> str:
        return _environment.get_template("url_link.html").render(
            url=self.resolve_url(action, object_id),
            css_class=action.css_class,
            link_target=action.link_target,
            icon=action.icon,
            icon_class_prefix=self.settings.icon_class_prefix,
            label=label,
        )
