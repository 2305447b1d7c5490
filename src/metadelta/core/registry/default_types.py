# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 metadelta
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, see <https://www.gnu.org/licenses/>.
#  */
# -----------------------------------------------------------------------------

from metadelta.core.registry.models import MetadataDescriptor


def _children(
    parent_type: str, parent_directory: str, tags: dict[str, str]
) -> list[MetadataDescriptor]:
    return [
        MetadataDescriptor(
            type=child_type,
            directory_label=f"{parent_directory}.{tag}",
            xml_tag=tag,
            parent_type=parent_type,
        )
        for child_type, tag in tags.items()
    ]


DEFAULT_METADATA: list[MetadataDescriptor] = [
    # custom labels
    MetadataDescriptor(type="CustomLabels", directory_label="labels", suffix="labels"),
    MetadataDescriptor(
        type="CustomLabel",
        directory_label="labels.labels",
        xml_tag="labels",
        parent_type="CustomLabels",
        standalone=True,
    ),
    # workflows
    MetadataDescriptor(type="Workflow", directory_label="workflows", suffix="workflow"),
    *_children(
        "Workflow",
        "workflows",
        {
            "WorkflowAlert": "alerts",
            "WorkflowFieldUpdate": "fieldUpdates",
            "WorkflowKnowledgePublish": "knowledgePublishes",
            "WorkflowOutboundMessage": "outboundMessages",
            "WorkflowRule": "rules",
            "WorkflowTask": "tasks",
        },
    ),
    # sharing rules
    MetadataDescriptor(
        type="SharingRules", directory_label="sharingRules", suffix="sharingRules"
    ),
    *_children(
        "SharingRules",
        "sharingRules",
        {
            "SharingCriteriaRule": "sharingCriteriaRules",
            "SharingOwnerRule": "sharingOwnerRules",
            "SharingGuestRule": "sharingGuestRules",
            "SharingTerritoryRule": "sharingTerritoryRules",
        },
    ),
    # routing rules
    MetadataDescriptor(
        type="AssignmentRules",
        directory_label="assignmentRules",
        suffix="assignmentRules",
    ),
    *_children("AssignmentRules", "assignmentRules", {"AssignmentRule": "assignmentRule"}),
    MetadataDescriptor(
        type="AutoResponseRules",
        directory_label="autoResponseRules",
        suffix="autoResponseRules",
    ),
    *_children(
        "AutoResponseRules", "autoResponseRules", {"AutoResponseRule": "autoResponseRule"}
    ),
    MetadataDescriptor(
        type="EscalationRules",
        directory_label="escalationRules",
        suffix="escalationRules",
    ),
    *_children("EscalationRules", "escalationRules", {"EscalationRule": "escalationRule"}),
    MetadataDescriptor(
        type="MatchingRules", directory_label="matchingRules", suffix="matchingRule"
    ),
    *_children("MatchingRules", "matchingRules", {"MatchingRule": "matchingRules"}),
]
