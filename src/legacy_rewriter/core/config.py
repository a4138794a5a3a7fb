import os

from pydantic import BaseModel, ConfigDict

PRE_R3_MARKER = "__PRE_R3__"
POST_R3_MARKER = "__POST_R3__"
DEFAULT_IMPORT_PREFIX = "i"


class RewriteConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    pre_marker: str = PRE_R3_MARKER
    post_marker: str = POST_R3_MARKER
    import_prefix: str = DEFAULT_IMPORT_PREFIX
    log_level: str = "WARNING"


def load_config() -> RewriteConfig:
    return RewriteConfig(
        pre_marker=os.getenv("LEGACY_REWRITER_PRE_MARKER", PRE_R3_MARKER),
        post_marker=os.getenv("LEGACY_REWRITER_POST_MARKER", POST_R3_MARKER),
        import_prefix=os.getenv("LEGACY_REWRITER_IMPORT_PREFIX", DEFAULT_IMPORT_PREFIX),
        log_level=os.getenv("LEGACY_REWRITER_LOG_LEVEL", "WARNING").upper(),
    )
