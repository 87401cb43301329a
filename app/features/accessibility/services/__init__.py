"""
Accessibility Services

One analysis flows through these modules in order:

1. page_loader.py - Opens the URL in headless Chrome and hands back a BrowserPage
2. rule_engine.py - Injects axe-core and runs the WCAG 2.0/2.1 A and AA rules
3. html_validator.py - Sends the page HTML to the W3C Nu validator (optional, never fatal)
4. extended_checks.py - Zoom lock, autoplay, tabindex, :focus styles, refresh meta
5. analyzer.py - Runs 1-4 on one page and builds the AnalysisResult

Around the pipeline:

- check_service.py: Stores and reads AccessibilityCheck rows
- categorizer.py: Turns stored violations into categories and recommendations
- translations.py: Localized report text
"""
