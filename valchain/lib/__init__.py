from .type_helpers import TypeTag, classify, precise_classify

__all__ = ["TypeTag", "classify", "precise_classify"]
