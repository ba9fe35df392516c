"""
Markup tag tables

STANDARD_TAGS mirrors the html-tag-names list used by the Overture
tooling: any tag in this set is always emitted as a plain element, even if a
component with the same lowercase name is imported.
"""

from typing import Dict, FrozenSet


STANDARD_TAGS: FrozenSet[str] = frozenset({
    'a', 'abbr', 'acronym', 'address', 'applet', 'area', 'article', 'aside',
    'audio', 'b', 'base', 'basefont', 'bdi', 'bdo', 'bgsound', 'big', 'blink',
    'blockquote', 'body', 'br', 'button', 'canvas', 'caption', 'center',
    'cite', 'code', 'col', 'colgroup', 'command', 'content', 'data',
    'datalist', 'dd', 'del', 'details', 'dfn', 'dialog', 'dir', 'div', 'dl',
    'dt', 'element', 'em', 'embed', 'fieldset', 'figcaption', 'figure',
    'font', 'footer', 'form', 'frame', 'frameset', 'h1', 'h2', 'h3', 'h4',
    'h5', 'h6', 'head', 'header', 'hgroup', 'hr', 'html', 'i', 'iframe',
    'image', 'img', 'input', 'ins', 'isindex', 'kbd', 'keygen', 'label',
    'legend', 'li', 'link', 'listing', 'main', 'map', 'mark', 'marquee',
    'math', 'menu', 'menuitem', 'meta', 'meter', 'multicol', 'nav', 'nextid',
    'nobr', 'noembed', 'noframes', 'noscript', 'object', 'ol', 'optgroup',
    'option', 'output', 'p', 'param', 'picture', 'plaintext', 'pre',
    'progress', 'q', 'rb', 'rbc', 'rp', 'rt', 'rtc', 'ruby', 's', 'samp',
    'script', 'search', 'section', 'select', 'shadow', 'slot', 'small',
    'source', 'spacer', 'span', 'strike', 'strong', 'style', 'sub',
    'summary', 'sup', 'svg', 'table', 'tbody', 'td', 'template', 'textarea',
    'tfoot', 'th', 'thead', 'time', 'title', 'tr', 'track', 'tt', 'u', 'ul',
    'var', 'video', 'wbr', 'xmp',
})

# Elements that never have content or an end tag
VOID_TAGS: FrozenSet[str] = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input', 'keygen',
    'link', 'meta', 'param', 'source', 'track', 'wbr',
})

# HTML attribute -> DOM property, for names that are not simply lowercase
PROPERTY_NAMES: Dict[str, str] = {
    'class': 'className',
    'for': 'htmlFor',
    'http-equiv': 'httpEquiv',
    'accept-charset': 'acceptCharset',
    'accesskey': 'accessKey',
    'autocapitalize': 'autoCapitalize',
    'autocomplete': 'autoComplete',
    'autofocus': 'autoFocus',
    'autoplay': 'autoPlay',
    'charset': 'charSet',
    'colspan': 'colSpan',
    'contenteditable': 'contentEditable',
    'crossorigin': 'crossOrigin',
    'datetime': 'dateTime',
    'enctype': 'encType',
    'enterkeyhint': 'enterKeyHint',
    'formaction': 'formAction',
    'formenctype': 'formEncType',
    'formmethod': 'formMethod',
    'formnovalidate': 'formNoValidate',
    'formtarget': 'formTarget',
    'hreflang': 'hrefLang',
    'inputmode': 'inputMode',
    'ismap': 'isMap',
    'itemid': 'itemId',
    'itemprop': 'itemProp',
    'itemref': 'itemRef',
    'itemscope': 'itemScope',
    'itemtype': 'itemType',
    'maxlength': 'maxLength',
    'minlength': 'minLength',
    'nomodule': 'noModule',
    'novalidate': 'noValidate',
    'playsinline': 'playsInline',
    'readonly': 'readOnly',
    'referrerpolicy': 'referrerPolicy',
    'rowspan': 'rowSpan',
    'spellcheck': 'spellCheck',
    'srcdoc': 'srcDoc',
    'srclang': 'srcLang',
    'srcset': 'srcSet',
    'tabindex': 'tabIndex',
    'usemap': 'useMap',
}

# Properties whose value is a whitespace-separated token list
LIST_PROPERTIES: FrozenSet[str] = frozenset({'className'})
