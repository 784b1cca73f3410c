from rest_framework.parsers import JSONParser


class PlainTextJSONParser(JSONParser):
    """TradingView posts alert bodies as text/plain even when they hold JSON"""
    media_type = 'text/plain'
