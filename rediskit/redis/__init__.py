"""RESP replies, parser and reply assertions."""