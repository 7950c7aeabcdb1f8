"""GROQ query construction for the Sanity HTTP query API."""

from urllib.parse import quote

from hydration.config import SanityConfig

LIST_PROJECTION = (
    "{title,previewHeading,\"slug\":slug.current,language,author,readTime,"
    "publishedAt,\"imageUrl\":image.asset->url,body,perex}"
)

SINGLE_PROJECTION = (
    "{title,previewHeading,perex,readTime,\"slug\":slug.current,language,author,"
    "publishedAt,\"imageUrl\":image.asset->url,body,resources[]{label,url}}"
)

# Characters encodeURIComponent leaves untouched besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_list_query(locale: str) -> str:
    """All posts in *locale*, newest first."""
    return (
        f'*[_type=="post" && language == "{locale}"] '
        f"| order(publishedAt desc){LIST_PROJECTION}"
    )


def build_single_query(locale: str, slug: str) -> str:
    """The first post in *locale* whose slug matches.

    The slug is placed inside a GROQ string literal as-is; the request URL
    percent-encodes the whole query.
    """
    return (
        f'*[_type=="post" && language == "{locale}" && slug.current=="{slug}"][0]'
        f"{SINGLE_PROJECTION}"
    )


def encode_query(groq: str) -> str:
    return quote(groq, safe=_URI_COMPONENT_SAFE)


def build_query_url(config: SanityConfig, groq: str) -> str:
    """Full GET URL for *groq* against the configured project and dataset."""
    return (
        f"https://{config.project_id}.{config.host}/v{config.api_version}"
        f"/data/query/{config.dataset}?query={encode_query(groq)}"
    )
