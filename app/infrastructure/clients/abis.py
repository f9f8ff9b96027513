from __future__ import annotations


def _address(name: str) -> dict:
    return {"internalType": "address", "name": name, "type": "address"}


def _uint(name: str, bits: int = 256) -> dict:
    return {"internalType": f"uint{bits}", "name": name, "type": f"uint{bits}"}


ERC20_ABI = [
    {
        "inputs": [_address("account")],
        "name": "balanceOf",
        "outputs": [_uint("")],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [_uint("", 8)],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
]

# Older tokens such as MKR return symbol() as bytes32.
ERC20_BYTES32_SYMBOL_ABI = [
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
        "stateMutability": "view",
        "type": "function",
    },
]

UNISWAP_V2_FACTORY_ABI = [
    {
        "inputs": [_address("tokenA"), _address("tokenB")],
        "name": "getPair",
        "outputs": [_address("pair")],
        "stateMutability": "view",
        "type": "function",
    },
]

UNISWAP_V2_PAIR_ABI = [
    {
        "inputs": [],
        "name": "getReserves",
        "outputs": [
            _uint("reserve0", 112),
            _uint("reserve1", 112),
            _uint("blockTimestampLast", 32),
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "token0",
        "outputs": [_address("")],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "token1",
        "outputs": [_address("")],
        "stateMutability": "view",
        "type": "function",
    },
]

UNISWAP_V2_ROUTER_ABI = [
    {
        "inputs": [
            _uint("amountIn"),
            {"internalType": "address[]", "name": "path", "type": "address[]"},
        ],
        "name": "getAmountsOut",
        "outputs": [{"internalType": "uint256[]", "name": "amounts", "type": "uint256[]"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            _uint("amountIn"),
            _uint("amountOutMin"),
            {"internalType": "address[]", "name": "path", "type": "address[]"},
            _address("to"),
            _uint("deadline"),
        ],
        "name": "swapExactTokensForTokens",
        "outputs": [{"internalType": "uint256[]", "name": "amounts", "type": "uint256[]"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

UNISWAP_V3_QUOTER_V2_ABI = [
    {
        "inputs": [
            {
                "components": [
                    _address("tokenIn"),
                    _address("tokenOut"),
                    _uint("amountIn"),
                    _uint("fee", 24),
                    _uint("sqrtPriceLimitX96", 160),
                ],
                "internalType": "struct IQuoterV2.QuoteExactInputSingleParams",
                "name": "params",
                "type": "tuple",
            }
        ],
        "name": "quoteExactInputSingle",
        "outputs": [
            _uint("amountOut"),
            _uint("sqrtPriceX96After", 160),
            _uint("initializedTicksCrossed", 32),
            _uint("gasEstimate"),
        ],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

UNISWAP_V3_SWAP_ROUTER_ABI = [
    {
        "inputs": [
            {
                "components": [
                    _address("tokenIn"),
                    _address("tokenOut"),
                    _uint("fee", 24),
                    _address("recipient"),
                    _uint("deadline"),
                    _uint("amountIn"),
                    _uint("amountOutMinimum"),
                    _uint("sqrtPriceLimitX96", 160),
                ],
                "internalType": "struct ISwapRouter.ExactInputSingleParams",
                "name": "params",
                "type": "tuple",
            }
        ],
        "name": "exactInputSingle",
        "outputs": [_uint("amountOut")],
        "stateMutability": "payable",
        "type": "function",
    },
]
