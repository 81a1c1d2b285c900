# -*- coding: utf-8 -*-
"""
Фильтр логов для консоли — убирает эмодзи.
"""

import re
import logging


class EmojiFilter(logging.Filter):
    """
    Убирает эмодзи и пиктограммы из сообщения лога.
    """
    EMOJI_PATTERN = re.compile(
        "["
        "\U0001f300-\U0001f5ff"  # symbols & pictographs
        "\U0001f600-\U0001f64f"  # emoticons
        "\U0001f680-\U0001f6ff"  # transport & map symbols
        "\U0001f900-\U0001f9ff"  # supplemental symbols
        "\u2600-\u27bf"  # misc symbols, dingbats
        "\ufe0f"  # variation selector
        "]+",
        flags=re.UNICODE
    )

    def filter(self, record):
        if isinstance(record.msg, str):
            clean_msg = self.EMOJI_PATTERN.sub('', record.msg)
            record.msg = ' '.join(clean_msg.split())
        return True


class UnicodeSafeFormatter(logging.Formatter):
    """
    Форматтер, который не падает на символах, которых нет в кодировке потока.
    """
    def format(self, record):
        try:
            return super().format(record)
        except UnicodeEncodeError:
            record.msg = str(record.msg).encode('utf-8', errors='replace').decode('utf-8')
            return super().format(record)
