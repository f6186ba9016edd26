#!/usr/bin/env python3
"""Infer the theme (brand) color of a web page.

Usage:
    python scripts/extract-theme-color.py --url https://example.com
    python scripts/extract-theme-color.py --url https://example.com --renderer browser --output theme.json
    python scripts/extract-theme-color.py --url https://example.com --html saved.html --css theme.css

The http renderer fetches raw HTML; the browser renderer loads the page in
headless Chromium so layout and computed colors are available.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dynamic_theme import (
    BrowserContentSource,
    ColorPipeline,
    ConfigError,
    HttpContentSource,
    InferenceEngine,
    StaticContentSource,
    StylesheetSink,
    ThemeConfig,
    configure_logging,
    is_supported_url,
    load_config,
)
from dynamic_theme.pipeline import hostname_for


async def infer_with_http(engine_args, url, timeout):
    async with HttpContentSource(timeout=timeout) as source:
        engine = InferenceEngine(source=source, **engine_args)
        return await engine.infer(url, url), engine


async def infer_with_browser(engine_args, url, timeout):
    try:
        from playwright.async_api import async_playwright
    except ImportError:
        print("Error: playwright is required. Install with: pip install playwright && playwright install chromium")
        sys.exit(1)

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        page = await browser.new_page(viewport={"width": 1280, "height": 720})
        try:
            await page.goto(url, wait_until="networkidle", timeout=timeout * 1000)
        except Exception as e:
            print(f"  Warning: page did not settle ({e}), continuing with what loaded")

        source = BrowserContentSource({url: page})
        engine = InferenceEngine(source=source, **engine_args)
        try:
            return await engine.infer(url, url), engine
        finally:
            await browser.close()


async def infer_from_file(engine_args, url, html_path):
    source = StaticContentSource({url: html_path.read_text(encoding="utf-8", errors="replace")})
    engine = InferenceEngine(source=source, **engine_args)
    return await engine.infer(url, url), engine


def build_report(url, theme, engine):
    return {
        "url": url,
        "hostname": hostname_for(url),
        "color": theme.hex,
        "hsla": theme.hsla._asdict(),
        "attempts": engine.attempts[url],
    }


def main():
    parser = argparse.ArgumentParser(
        description="Infer the brand color of a web page for use as a theme accent."
    )
    parser.add_argument("--url", required=True, help="Page URL to analyze")
    parser.add_argument("--config", help="Path to a preferences JSON file")
    parser.add_argument(
        "--renderer", choices=["http", "browser"], default="http",
        help="How to load the page (default: http)",
    )
    parser.add_argument(
        "--html", help="Analyze a saved HTML file instead of loading the URL"
    )
    parser.add_argument(
        "--timeout", type=float, default=30.0,
        help="Seconds to wait for the page markup (default: 30)",
    )
    parser.add_argument("--output", help="Write the result as JSON to this path")
    parser.add_argument("--css", help="Write the generated tab/URL-bar CSS to this path")
    parser.add_argument("--verbose", action="store_true", help="Show pipeline debug logging")
    args = parser.parse_args()

    if not is_supported_url(args.url):
        print(f"Error: only http(s) URLs are supported: {args.url}")
        sys.exit(1)

    try:
        config = load_config(args.config) if args.config else ThemeConfig()
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
        configure_logging(config)

    sink = StylesheetSink(config)
    sink.selected_target = args.url
    engine_args = {
        "pipeline": ColorPipeline(config),
        "sink": sink,
        "markup_timeout": args.timeout,
    }

    print(f"Analyzing {args.url}...")
    if args.html:
        html_path = Path(args.html)
        if not html_path.exists():
            print(f"Error: file not found: {html_path}")
            sys.exit(1)
        theme, engine = asyncio.run(infer_from_file(engine_args, args.url, html_path))
    elif args.renderer == "browser":
        theme, engine = asyncio.run(infer_with_browser(engine_args, args.url, args.timeout))
    else:
        theme, engine = asyncio.run(infer_with_http(engine_args, args.url, args.timeout))

    if theme is None:
        print("Theming is disabled in the configuration; nothing to do.")
        return

    report = build_report(args.url, theme, engine)
    print(f"\nTheme color: {report['color']}")
    print(f"  HSLA: {theme.hsla.h}, {theme.hsla.s}%, {theme.hsla.l}%, {theme.hsla.a}")
    print(f"  Attempts: {report['attempts']}")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(report, f, indent=2)
        print(f"\nResult saved to: {output_path}")

    if args.css:
        css_path = Path(args.css)
        css_path.parent.mkdir(parents=True, exist_ok=True)
        css_path.write_text(sink.css_text())
        print(f"CSS saved to: {css_path}")

    print("\nDone.")


if __name__ == "__main__":
    main()
