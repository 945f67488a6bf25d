"""
微信签名验证工具
"""
import hashlib
import hmac
from typing import List


def compute_signature(token: str, timestamp: str, nonce: str) -> str:
    """
    计算微信服务器请求的签名
    
    Args:
        token: 服务器配置中的Token
        timestamp: 时间戳
        nonce: 随机字符串
    
    Returns:
        str: sha1十六进制摘要
    """
    # 将token、timestamp、nonce按字典序排序
    tmp_arr: List[str] = [token, timestamp, nonce]
    tmp_arr.sort()
    
    # 拼接字符串并sha1加密
    tmp_str = ''.join(tmp_arr)
    return hashlib.sha1(tmp_str.encode('utf-8')).hexdigest()


def verify_signature(token: str, timestamp: str, nonce: str, signature: str) -> bool:
    """验证微信服务器请求的签名"""
    expected = compute_signature(token, timestamp, nonce)
    return hmac.compare_digest(expected.encode('utf-8'), signature.encode('utf-8'))
