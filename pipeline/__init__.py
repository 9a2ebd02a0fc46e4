"""
Book reconstruction pipeline.

Stages:
1. transcribe - Extract page text from screenshots with a vision model
2. chapters   - Segment transcribed pages into chapters using the ToC
3. export     - Render chapters as markdown

Shared helpers: navigation (page footer parsing), toc_analysis (front/back
matter detection).
"""
