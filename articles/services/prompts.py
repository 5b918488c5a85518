# articles/services/prompts.py

SYSTEM_CONTEXT = """You are an expert tech journalist."""

SOURCE_TEMPLATE = """
SOURCE {index}: {title}
URL: {url}
CONTENT:
{content}
"""

SOURCE_DELIMITER = "\n" + "=" * 80 + "\n"

SOURCE_EXCERPT_CHARS = 2000

TEMPLATE = """{system_context} Write a comprehensive article about: "{title}"

Use these scraped sources for information:

{sources}

Requirements:
- Format in clean HTML: <h2>, <h3>, <p>, <ul>, <li>
- NO markdown, NO code blocks, NO backticks
- 400-600 words minimum
- Include facts and insights from the sources
- Add a "References" section at the end with source links
- Professional and informative tone

Output only the HTML:"""


def format_sources(sources):
    return SOURCE_DELIMITER.join(
        SOURCE_TEMPLATE.format(
            index=i,
            title=source['title'],
            url=source['url'],
            content=source['content'][:SOURCE_EXCERPT_CHARS],
        )
        for i, source in enumerate(sources, start=1)
    )


def get_rewrite_prompt(title, sources):
    return TEMPLATE.format(
        system_context=SYSTEM_CONTEXT,
        title=title,
        sources=format_sources(sources),
    )
