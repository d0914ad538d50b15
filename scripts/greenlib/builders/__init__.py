from greenlib.builders.epub import EpubBuilder

BUILDERS = {
    "epub": EpubBuilder,
}
