# Served when no product store is configured or it was unreachable at startup.
# Same raw shape as the "Products" collection.

FALLBACK_PRODUCTS = [
    {
        "_id": "fallback-e001gir31",
        "ID": 2276,
        "Type": "simple",
        "SKU": "E001GIR31",
        "Name": "Galaxy Internal Rack Mount 1 To 3KVA, Online UPS",
        "Published": 1,
        "Is featured?": 0,
        "In stock?": 1,
        "Categories": "UPS > Single Phase Online RT, UPS",
        "descriptionText": (
            "ExTell Galaxy is a premium range online Double Conversion Single Phase UPS "
            "with internal batteries and backup time expansion capacity."
        ),
        "Images": (
            "https://extellsystems.com/wp-content/uploads/2025/08/E001GIR31_Front-Hero-2-scaled.png, "
            "https://extellsystems.com/wp-content/uploads/2025/08/E001GIR31_Rear-scaled.png"
        ),
        "datasheet": (
            "https://extellsystems.com/wp-content/uploads/2025/11/"
            "ExTell-Galaxy_Series_Internal-UPS_1-to-3kVA_Rack-Mount.pdf"
        ),
        "detailRows": [
            {"parameter": "Model", "value": "E003SPIR31"},
            {"parameter": "Capacity", "value": "3000VA / 3000W"},
            {"parameter": "Nominal Voltage", "value": "208/220/230/240Vac"},
            {"parameter": "Battery Number", "value": "6"},
        ],
        "features": [
            "Short Lead Time",
            "Unity Power Factor",
            "Rack-Tower deployment compatible",
            "Expandable Backup Time",
            "Advanced Smart Management",
        ],
    },
]
