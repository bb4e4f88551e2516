"""Layout of a relocalisation dataset and of the results of an experiment."""

import os
from typing import List

TRAIN_FOLDER_NAME = "train"
VALIDATION_FOLDER_NAME = "validation"
TEST_FOLDER_NAME = "test"


def find_sequence_names(dataset_folder: str) -> List[str]:
    """
    Find the sequences under a dataset root.

    A sub-folder is a sequence when it has both a "train" and a "test" folder.
    Names are sorted since directory listings come in no particular order.
    """
    sequences = []
    for entry in os.scandir(dataset_folder):
        train_path = os.path.join(entry.path, TRAIN_FOLDER_NAME)
        test_path = os.path.join(entry.path, TEST_FOLDER_NAME)
        if os.path.isdir(train_path) and os.path.isdir(test_path):
            sequences.append(entry.name)
    return sorted(sequences)


def gt_folder(dataset_folder: str, sequence: str, use_validation: bool = False) -> str:
    split = VALIDATION_FOLDER_NAME if use_validation else TEST_FOLDER_NAME
    return os.path.join(dataset_folder, sequence, split)


def reloc_folder(reloc_base_folder: str, reloc_tag: str, sequence: str) -> str:
    return os.path.join(reloc_base_folder, f"{reloc_tag}_{sequence}")
