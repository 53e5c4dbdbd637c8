"""
Pytest configuration and fixtures for ListingFlux tests.
"""
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

# Add src to path for imports
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

import pytest
from listingflux.models import RawListing


LONG_BULLETS = [
    "Durable stainless steel body built for daily kitchen use",
    "Keeps drinks hot for 12 hours and cold for 24 hours",
    "Leak-proof lid with one-handed push button operation",
    "Fits most car cup holders and standard backpack pockets",
    "Dishwasher safe lid and easy to clean wide mouth opening",
    "BPA-free materials tested for food contact safety",
    "Powder coated finish resists scratches and sweating",
    "Backed by a lifetime warranty from the manufacturer",
    "Available in twelve colours to match any personal style",
    "Ships in recyclable packaging with minimal plastic use",
]


@pytest.fixture
def listing_html():
    """Listing page with title, long and short bullets, and a description."""
    items = "\n".join(
        f'<li><span class="a-list-item">  {text}  </span></li>' for text in LONG_BULLETS
    )
    return f"""
    <!DOCTYPE html>
    <html>
    <head><title>Amazon.com: Blue Widget Pro</title></head>
    <body>
        <h1 id="title">
            <span id="productTitle">
                Blue Widget Pro   Insulated Travel Mug
            </span>
        </h1>
        <div id="feature-bullets">
            <ul>
                <li><span class="a-list-item">See more</span></li>
                <li><span class="a-list-item">12345678901234567890</span></li>
                {items}
            </ul>
        </div>
        <div id="productDescription">
            <p>The Blue Widget Pro keeps your coffee hot
            on the longest commute.</p>
        </div>
    </body>
    </html>
    """


@pytest.fixture
def short_bullets_html():
    """Listing page where every bullet is a placeholder."""
    return """
    <html><body>
        <span id="productTitle">Blue Widget Pro</span>
        <div id="feature-bullets"><ul>
            <li><span>See more</span></li>
            <li><span>Blue</span></li>
            <li><span>Make sure this fits</span></li>
        </ul></div>
        <div id="productDescription">A sturdy widget.</div>
    </body></html>
    """


@pytest.fixture
def blocked_html():
    """Robot check page served instead of the listing."""
    return """
    <html><head><title>Robot Check</title></head>
    <body><p>Enter the characters you see below</p>
    <p>Sorry, we just need to make sure you're not a robot.</p></body></html>
    """


@pytest.fixture
def raw_listing():
    """A scraped listing."""
    return RawListing(
        title="Blue Widget Pro",
        bullets=("Durable stainless steel body built for daily kitchen use",),
        description="The Blue Widget Pro keeps your coffee hot.",
    )


def make_playwright(html=None):
    """
    Build a fake ``sync_playwright`` factory.

    Returns (factory, browser, page) so tests can script the page and check
    teardown.
    """
    factory = MagicMock(name="sync_playwright")
    manager = factory.return_value
    # A truthy __exit__ would swallow exceptions raised inside the with block
    manager.__exit__.return_value = False

    playwright = manager.__enter__.return_value
    browser = playwright.chromium.launch.return_value
    page = browser.new_context.return_value.new_page.return_value
    page.content.return_value = html
    return factory, browser, page


def make_session(text="", status_code=200):
    """Build a fake ``requests.Session`` factory returning one response."""
    factory = MagicMock(name="Session")
    manager = factory.return_value
    manager.__exit__.return_value = False

    session = manager.__enter__.return_value
    session.headers = {}
    response = session.get.return_value
    response.text = text
    response.status_code = status_code
    return factory, session, response


def make_completion(content):
    """OpenAI chat completion response carrying ``content``."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


@pytest.fixture
def fake_playwright():
    """Factory for fake Playwright sessions."""
    return make_playwright


@pytest.fixture
def fake_session():
    """Factory for fake requests sessions."""
    return make_session


@pytest.fixture
def completion():
    """Factory for fake chat completion responses."""
    return make_completion
