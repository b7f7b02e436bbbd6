import math
from functools import reduce
from typing import Callable, List


def fibonacci_series(n: int) -> List[int]:
    """First `n` terms of 0, 1, 1, 2, 3, ..."""
    if n <= 0:
        return []
    if n == 1:
        return [0]
    seq = [0, 1]
    while len(seq) < n:
        seq.append(seq[-1] + seq[-2])
    return seq


def is_prime(n: int) -> bool:
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def filter_primes(nums: List[int]) -> List[int]:
    return [x for x in nums if is_prime(x)]


def gcd(a: int, b: int) -> int:
    # gcd(0, 0) == 0; sign is dropped.
    return math.gcd(a, b)


def lcm(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return abs(a * b) // gcd(a, b)


def reduce_list(nums: List[int], op: Callable[[int, int], int]) -> int:
    """Left-fold `op` over the absolute values of a non-empty list."""
    return reduce(op, (abs(x) for x in nums[1:]), abs(nums[0]))


def lcm_of_list(nums: List[int]) -> int:
    return reduce_list(nums, lcm)


def hcf_of_list(nums: List[int]) -> int:
    return reduce_list(nums, gcd)
