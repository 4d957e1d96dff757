"""Body schemas the early decoder filters configuration files against."""

from .hcl import AttributeSchema, BlockHeaderSchema, BodySchema

root_schema = BodySchema(
    blocks=(
        BlockHeaderSchema(type="terraform"),
        BlockHeaderSchema(type="provider", label_names=("name",)),
        BlockHeaderSchema(type="data", label_names=("type", "name")),
        BlockHeaderSchema(type="resource", label_names=("type", "name")),
        BlockHeaderSchema(type="module", label_names=("name",)),
    ),
)

terraform_block_schema = BodySchema(
    attributes=(
        AttributeSchema(name="required_version"),
    ),
    blocks=(
        BlockHeaderSchema(type="required_providers"),
    ),
)

provider_config_schema = BodySchema(
    attributes=(
        AttributeSchema(name="version"),
        AttributeSchema(name="alias"),
    ),
)

resource_schema = BodySchema(
    attributes=(
        AttributeSchema(name="provider"),
    ),
)

module_schema = BodySchema(
    attributes=(
        AttributeSchema(name="source"),
    ),
)
