"""
Habillage commun page live / export : <head> figé et footer Jaki Global.
"""
import html

from ..core.design_system import GOOGLE_FONTS_URL

SITE_TITLE = "Jaki Global"
CONTACT_EMAIL = "jakiinfo.global@gmail.com"
DONATION_CODE = "$26KG1"
COPYRIGHT = "© 2025 Jaki Global. All rights reserved."

RESET_CSS = """
    body {
      margin: 0;
      padding: 0;
      font-family: 'Inter', sans-serif;
    }"""

# Styles du rendu live uniquement (placeholders, grille produits, canvas)
LIVE_CSS = """
    .page-container { max-width: 72rem; margin: 0 auto; padding: 24px; box-sizing: border-box; }
    .page-container > * + * { margin-top: 16px; }
    .placeholder { background: #f4f4f5; color: #71717a; padding: 32px; border-radius: 6px; text-align: center; }
    .placeholder-title { font-weight: 500; color: #18181b; }
    .empty-state { display: flex; align-items: center; justify-content: center; min-height: 400px; text-align: center; color: #71717a; }
    .empty-card { max-width: 28rem; margin: 20vh auto; padding: 24px; border: 1px solid #e4e4e7; border-radius: 8px; text-align: center; }
    .page-container.editing { position: relative; }
    .canvas-clear { position: absolute; inset: 0; }
    .page-container > .canvas-clear + * { margin-top: 0; }
    .select-overlay { position: absolute; inset: 0; z-index: 1; }
    .delete-chip { position: absolute; top: -8px; right: -8px; z-index: 2; margin: 0; }
    .delete-chip button { width: 24px; height: 24px; border-radius: 6px; border: 0; background: #ef4444; color: #fff; cursor: pointer; }
    .backdrop-select { position: absolute; right: 0; top: -24px; z-index: 2; font-size: 12px; padding: 4px 8px; border-radius: 6px; border: 1px solid #e4e4e7; background: #fff; color: #18181b; text-decoration: none; }
    .backdrop-select.selected { background: #3b82f6; color: #fff; }
    .product-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(220px, 1fr)); gap: 24px; }
    .product-card { border: 1px solid #e4e4e7; border-radius: 8px; overflow: hidden; }
    .product-card img { width: 100%; aspect-ratio: 1; object-fit: cover; display: block; }
    .product-card h3 { font-size: 18px; margin: 12px; }
    .product-price { font-size: 22px; font-weight: 700; margin: 12px; }
    .product-variants { font-size: 12px; color: #71717a; margin: 0 12px; }
    .product-grid-notice { text-align: center; padding: 48px 0; color: #71717a; }"""


def document_head(title: str = SITE_TITLE, extra_css: str = "") -> str:
    return f"""<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(title)}</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="{html.escape(GOOGLE_FONTS_URL)}" rel="stylesheet">
  <style>{RESET_CSS}{extra_css}
  </style>
</head>"""


def footer() -> str:
    return f"""<footer style="background-color:#0d0d0d; color:#ffffff; text-align:center; padding:20px; font-family:Arial, sans-serif;">
    <p style="margin:6px 0; font-size:16px;">
      <strong>Contact:</strong>
      <a href="mailto:{CONTACT_EMAIL}" style="color:#00aced; text-decoration:none;">{CONTACT_EMAIL}</a>
    </p>
    <p style="margin:6px 0; font-size:16px;">
      <strong>Please donate:</strong>
      <span style="font-weight:bold; color:#ff4d4d;">{DONATION_CODE}</span>
    </p>
    <p style="margin:6px 0; font-size:13px; opacity:0.7;">{COPYRIGHT}</p>
  </footer>"""


def document(body: str, title: str = SITE_TITLE, extra_css: str = "") -> str:
    """Document HTML autonome : head figé, corps, footer."""
    return f"""<!DOCTYPE html>
<html lang="en">
{document_head(title, extra_css)}
<body>
{body}
  {footer()}
</body>
</html>"""
