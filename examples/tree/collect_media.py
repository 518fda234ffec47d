"""Typed tree: collect every image, audio and video link in a post."""

from ubbparse import BaseVisitor, TagNode, extract_text, parse


class MediaCollector(BaseVisitor[None]):
    """Collect media sources in document order."""

    def __init__(self) -> None:
        self.media: list[tuple[str, str]] = []

    def _add(self, node: TagNode) -> None:
        # [img=a.png] and [img]a.png[/img] are both in use
        self.media.append((node.kind.name.lower(), node.get_attribute("src") or extract_text(node)))

    def visit_image(self, node: TagNode) -> None:
        self._add(node)

    def visit_audio(self, node: TagNode) -> None:
        self._add(node)

    def visit_video(self, node: TagNode) -> None:
        self._add(node)


source = """[quote=Ann]Look at this:
[img]https://example.com/cat.png[/img][/quote]
Song: [audio=https://example.com/song.mp3][/audio]
[video]https://example.com/clip.mp4[/video]
"""

collector = MediaCollector()
collector.visit(parse(source))

for kind, src in collector.media:
    print(f"{kind:6} {src}")
