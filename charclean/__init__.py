"""charclean: キャラクター表データで学ぶデータクリーニング教材。"""

__version__ = "0.1.0"
