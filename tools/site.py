"""
Site file operations — SEO metadata and site configuration.

Both are shallow merges into a JSON file under the site root. A domain
change is also written into the SEO component source when that file
exists, so the rendered canonical URLs follow.
"""

from logging_config import logger
from models import SiteContext, ToolResult
from schemas import UpdateConfigRequest, UpdateSiteMetadataRequest
from workspace import merge_json_file, rewrite_seo_domain


def do_update_site_metadata(ctx: SiteContext, request: UpdateSiteMetadataRequest) -> ToolResult:
    """Merge SEO metadata; rewrite the SEO component for a new domain."""
    settings = ctx.settings
    updates = request.metadata()
    merge_json_file(settings.seo_config_path, updates)
    cues: dict = {"updated_keys": sorted(updates), "file": settings.seo_config_path.name}

    if request.domain:
        component = settings.seo_component_path
        if component.is_file():
            source = component.read_text(encoding="utf-8")
            rewritten, replacements = rewrite_seo_domain(source, request.domain)
            if rewritten != source:
                component.write_text(rewritten, encoding="utf-8")
            cues["component_replacements"] = replacements
        else:
            cues["component"] = f"{component} not found; only {settings.seo_config_path.name} updated"

    logger.info(f"SEO metadata updated: {sorted(updates)}")
    message = "Successfully updated SEO configuration"
    if request.domain:
        message += f" with domain: {request.domain}"
    return ToolResult(operation="update-site-metadata", message=message, cues=cues)


def do_update_config(ctx: SiteContext, request: UpdateConfigRequest) -> ToolResult:
    """Merge keys into site.config.json (created if missing)."""
    path = ctx.settings.site_config_path
    merged = merge_json_file(path, request.config)
    logger.info(f"Site config updated: {sorted(request.config)}")
    return ToolResult(
        operation="update-config",
        message="Site configuration updated successfully",
        cues={"updated_keys": sorted(request.config), "total_keys": len(merged), "file": path.name},
    )
