def clean_text(text: str) -> str:
    """upper case the text and drop every whitespace character"""
    return ''.join(text.upper().split())


def group_blocks(text: str, block_size: int = 5, blocks_per_line: int = 10) -> str:
    """
    Split text into blocks of `block_size` characters separated by a space,
    with a line break after every `blocks_per_line` blocks (radio traffic layout).
    e.g. 'FQGAHW' -> 'FQGAH W'
    """
    blocks = [text[i:i + block_size] for i in range(0, len(text), block_size)]
    lines = [' '.join(blocks[i:i + blocks_per_line]) for i in range(0, len(blocks), blocks_per_line)]
    return '\n'.join(lines)
