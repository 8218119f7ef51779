"""Mandatory accessibility disclaimer for all audit outputs and exports.

This text must appear verbatim in the formatted report and in every export
(JSON, plain text, CSV and HTML). Do not modify it without legal review.
"""

ACCESSIBILITY_DISCLAIMER = """**Accessibility Disclaimer**

LukeUX provides automated accessibility analysis based on industry-recognized testing tools and standards, including WCAG 2.x and Section 508.

Results are not a certification of compliance and do not constitute legal advice or a guarantee of regulatory conformance.

Accessibility compliance depends on context, user flows, assistive technology behavior, and manual evaluation that extend beyond automated testing.

Users are responsible for conducting appropriate manual testing and consulting qualified accessibility or legal professionals before making compliance or regulatory claims."""

# Plain text version for non-markdown exports
ACCESSIBILITY_DISCLAIMER_PLAIN = """ACCESSIBILITY DISCLAIMER

LukeUX provides automated accessibility analysis based on industry-recognized testing tools and standards, including WCAG 2.x and Section 508.

Results are not a certification of compliance and do not constitute legal advice or a guarantee of regulatory conformance.

Accessibility compliance depends on context, user flows, assistive technology behavior, and manual evaluation that extend beyond automated testing.

Users are responsible for conducting appropriate manual testing and consulting qualified accessibility or legal professionals before making compliance or regulatory claims."""

# HTML version for HTML exports
ACCESSIBILITY_DISCLAIMER_HTML = """<div class="accessibility-disclaimer" style="margin: 24px 0; padding: 16px; border: 1px solid #e5e7eb; border-radius: 8px; background-color: #f9fafb;">
<h4 style="margin: 0 0 12px 0; font-size: 14px; font-weight: 600; color: #374151;">Accessibility Disclaimer</h4>
<p style="margin: 0 0 8px 0; font-size: 13px; line-height: 1.5; color: #4b5563;">
LukeUX provides automated accessibility analysis based on industry-recognized testing tools and standards, including WCAG 2.x and Section 508.
</p>
<p style="margin: 0 0 8px 0; font-size: 13px; line-height: 1.5; color: #4b5563;">
Results are not a certification of compliance and do not constitute legal advice or a guarantee of regulatory conformance.
</p>
<p style="margin: 0 0 8px 0; font-size: 13px; line-height: 1.5; color: #4b5563;">
Accessibility compliance depends on context, user flows, assistive technology behavior, and manual evaluation that extend beyond automated testing.
</p>
<p style="margin: 0; font-size: 13px; line-height: 1.5; color: #4b5563;">
Users are responsible for conducting appropriate manual testing and consulting qualified accessibility or legal professionals before making compliance or regulatory claims.
</p>
</div>"""
