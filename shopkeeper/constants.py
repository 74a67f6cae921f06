# shopkeeper/constants.py
DATA_DIR = "data"
DB_FILE_NAME = "shop.db"
DATA_DIR_ENV = "SHOPKEEPER_DATA_DIR"

SCHEMA_VERSION = 2

# record stores
STORE_PRODUCTS = "products"
STORE_CUSTOMERS = "customers"
STORE_SALES = "sales"
STORE_EXPENSES = "expenses"

DEFAULT_MIN_STOCK = 5

# one real currency unit, in minor units
CENTS = 100
MAX_EXPENSE_AMOUNT = 1_000_000 * CENTS

PRODUCT_CATEGORIES = (
    "Shapes",
    "Trucks",
    "Rodas",
    "Rolamentos",
    "Lixas",
    "Parafusos",
    "Ferramentas",
    "Acessórios",
    "Roupas",
    "Tênis",
    "Outros",
)

EXPENSE_CATEGORIES = (
    "Reposição de Estoque",
    "Aluguel",
    "Contas (Água/Luz/Internet)",
    "Salários e Benefícios",
    "Marketing e Publicidade",
    "Manutenção de Equipamentos",
    "Frete e Entregas",
    "Materiais de Escritório",
    "Taxas e Impostos",
    "Viagens e Transportes",
    "Outros Gastos",
)

PAYMENT_METHODS = (
    "Dinheiro",
    "PIX",
    "Cartão de Crédito",
    "Cartão de Débito",
    "Transferência Bancária",
    "Boleto",
    "Outro",
)

# payment choice made when a sale is committed
PAYMENT_FULL = "full"
PAYMENT_PARTIAL = "partial"
PAYMENT_TYPES = (PAYMENT_FULL, PAYMENT_PARTIAL)
