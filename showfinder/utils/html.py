from bs4 import BeautifulSoup

BLOCK_TAGS = ["p", "li", "h2", "h3", "h4", "tr"]


def content_root(html, selectors):
    """Parse a page and return the first matching content container (or the body)."""
    soup = BeautifulSoup(html, "html.parser")
    for selector in selectors:
        node = soup.select_one(selector)
        if node is not None:
            return node
    return soup.body or soup


def text_lines(node):
    """
    Visible text of a container as a list of lines.
    <br> starts a new line; inline markup (links, bold) stays on its line.
    """
    for br in node.find_all("br"):
        br.replace_with("\n")

    blocks = node.find_all(BLOCK_TAGS)
    texts = [block.get_text() for block in blocks] if blocks else [node.get_text()]

    lines = []
    for text in texts:
        for line in text.splitlines():
            line = " ".join(line.split())
            if line:
                lines.append(line)
    return lines
