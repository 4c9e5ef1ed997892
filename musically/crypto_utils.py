"""
加密工具模块

提供登录凭据的 XOR 混淆 (与 App 的线上格式一致)。

注意: 这只是混淆, 不是加密。固定密钥公开可见, 不提供任何机密性。

算法:
    encrypt_with_xor(text) = hex(utf8(text) XOR key)
"""

from typing import Union


# App 使用的固定密钥 (按字节循环使用)
XOR_KEY = b"\x05"


def xor_bytes(data: bytes, key: bytes = XOR_KEY) -> bytes:
    """
    按字节与循环密钥异或

    Args:
        data: 输入字节
        key: 循环使用的密钥

    Returns:
        异或后的字节

    Raises:
        ValueError: 密钥为空
    """
    if not key:
        raise ValueError("XOR key must not be empty")

    key_length = len(key)
    return bytes(byte ^ key[i % key_length] for i, byte in enumerate(data))


def encrypt_with_xor(text: Union[str, bytes], key: bytes = XOR_KEY) -> str:
    """
    混淆登录凭据

    Args:
        text: 明文 (字符串按 UTF-8 编码)
        key: 循环密钥

    Returns:
        小写十六进制字符串

    Example:
        >>> encrypt_with_xor("pw")
        '7572'
    """
    if isinstance(text, str):
        text = text.encode("utf-8")
    return xor_bytes(text, key).hex()


def decrypt_with_xor(hex_text: str, key: bytes = XOR_KEY) -> str:
    """
    encrypt_with_xor 的逆操作

    Args:
        hex_text: 十六进制字符串
        key: 循环密钥

    Returns:
        原始明文
    """
    return xor_bytes(bytes.fromhex(hex_text), key).decode("utf-8")
