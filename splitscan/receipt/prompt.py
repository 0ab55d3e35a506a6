# Bump together with splitscan.receipt.normalizer whenever the JSON shape changes.
PROMPT_VERSION = "1"

INSTRUCTIONS = """\
Analyze this receipt image and extract the following information in JSON format:

{
  "items": [
    {"name": "Item Name", "price": 12.99},
    {"name": "Another Item", "price": 8.50}
  ],
  "tax": 2.15,
  "tip": 3.00,
  "total": 26.64
}

Rules:
- Extract ALL purchased items (food, drinks, products, services) with their exact prices
- price is the line price shown on the receipt, as a decimal number with full precision
- Include the tax amount (look for "tax", "GST", "HST", "VAT", "sales tax")
- Include the tip if present (look for "tip", "gratuity", "service charge")
- Do NOT include tax, tip or totals as items
- Prices, tax, tip and total must be numbers, not strings
- Item names should be clean: no prices, quantities, or currency symbols
- If no tax or tip is found, set it to 0
- total is the grand total printed on the receipt
- Return ONLY the JSON object, no other text and no markdown"""


def build_prompt() -> str:
    return INSTRUCTIONS
